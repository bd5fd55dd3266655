"""Business logic services."""

from coedit_api.services.access import (
    check_read,
    check_write,
    require_delete_permission,
    require_document_access,
    require_user,
)
from coedit_api.services.document_sync import (
    DocumentSyncABC,
    HttpDocumentSync,
    InMemoryDocumentSync,
    get_document_sync,
)
from coedit_api.services.documents import (
    DocumentView,
    create_document,
    delete_document,
    get_document,
    list_documents,
    update_document_content,
    update_document_title,
)
from coedit_api.services.organizations import (
    CurrentUser,
    MemberSummary,
    create_organization_and_admin,
    get_current_user,
    join_organization_by_code,
    list_members,
)
from coedit_api.services.sessions import (
    AuthResult,
    create_session,
    purge_expired_sessions,
    resolve_session,
    sign_in,
    sign_out,
)

__all__ = [
    "AuthResult",
    "CurrentUser",
    "DocumentSyncABC",
    "DocumentView",
    "HttpDocumentSync",
    "InMemoryDocumentSync",
    "MemberSummary",
    "check_read",
    "check_write",
    "create_document",
    "create_organization_and_admin",
    "create_session",
    "delete_document",
    "get_current_user",
    "get_document",
    "get_document_sync",
    "join_organization_by_code",
    "list_documents",
    "list_members",
    "purge_expired_sessions",
    "require_delete_permission",
    "require_document_access",
    "require_user",
    "resolve_session",
    "sign_in",
    "sign_out",
    "update_document_content",
    "update_document_title",
]
