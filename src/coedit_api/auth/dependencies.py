"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# HTTP Bearer token security scheme
# auto_error=False: anonymous callers are handled by the service layer
bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Get the raw bearer token if present.

    The token is not validated here. Reads treat an unusable token as
    anonymous and writes reject it, which is the services' decision.
    """
    if credentials is None:
        return None
    return credentials.credentials
