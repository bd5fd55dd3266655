from coedit_api.routes.auth import router as auth_router
from coedit_api.routes.documents import router as documents_router
from coedit_api.routes.organizations import router as organizations_router
from coedit_api.routes.sync import router as sync_router

__all__ = [
    "auth_router",
    "documents_router",
    "organizations_router",
    "sync_router",
]
