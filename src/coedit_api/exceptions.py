"""Coedit API exceptions.

Every failure a caller can see is a subclass of CoeditError. Each carries the
HTTP status it maps to and a user-facing detail message that is surfaced
verbatim. None of them is retryable.
"""


class CoeditError(Exception):
    """Base exception for all named Coedit API failures.

    Attributes:
        status_code: HTTP status code the failure maps to
        detail: User-facing error message
    """

    status_code: int = 400
    default_detail: str = "Request failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class DuplicateEmailError(CoeditError):
    """A user with this email is already registered (in any organization)."""

    status_code = 409
    default_detail = "Email already registered"


class InvalidInviteCodeError(CoeditError):
    """No organization matches the given invite code."""

    status_code = 400
    default_detail = "Invalid organization code"


class InvalidCredentialsError(CoeditError):
    """Sign-in failed.

    Deliberately does not say whether the email or the password was wrong.
    """

    status_code = 401
    default_detail = "Invalid email or password"


class UnauthorizedError(CoeditError):
    """No usable session, or the target resource is outside the caller's org.

    Raised for missing, unknown and expired tokens, and for documents that do
    not exist or belong to another organization. The two cases are
    indistinguishable to the caller.
    """

    status_code = 401
    default_detail = "Unauthorized"


class ForbiddenError(CoeditError):
    """Authenticated and in-tenant, but lacking the required role or ownership."""

    status_code = 403
    default_detail = "Only the document creator or an organization admin can do this"


class InviteCodeExhaustedError(CoeditError):
    """Could not allocate a unique invite code within the retry cap."""

    status_code = 500
    default_detail = "Could not allocate an organization code, please try again"
