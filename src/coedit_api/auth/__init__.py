"""Bearer-token extraction for the HTTP API.

Tokens are opaque session tokens issued on sign-up and sign-in. Routes pass
the raw token into the service layer, which resolves it against the sessions
table on every call.
"""

from coedit_api.auth.dependencies import get_optional_token

__all__ = ["get_optional_token"]
