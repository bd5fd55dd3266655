"""Tests for the document registry and its authorization rules."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from coedit_api.exceptions import ForbiddenError, UnauthorizedError
from coedit_api.models import Document, User
from coedit_api.models.base import utc_now
from coedit_api.services.document_sync import InMemoryDocumentSync
from coedit_api.services.documents import (
    UNKNOWN_USER_NAME,
    create_document,
    delete_document,
    get_document,
    list_documents,
    update_document_content,
    update_document_title,
)
from coedit_api.services.sessions import AuthResult, create_session


@pytest.fixture
async def acme_doc(
    async_session: AsyncSession,
    document_sync: InMemoryDocumentSync,
    acme_admin: AuthResult,
) -> str:
    """A document created by the Acme admin."""
    doc_id = await create_document(
        async_session, document_sync, acme_admin.token, "Roadmap"
    )
    await async_session.commit()
    return doc_id


class TestCreateDocument:
    """Tests for create_document."""

    async def test_create_document(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_member: AuthResult,
    ):
        doc_id = await create_document(
            async_session, document_sync, acme_member.token, "Notes"
        )
        await async_session.commit()

        document = await async_session.get(Document, doc_id)
        assert document is not None
        assert document.title == "Notes"
        assert document.content == ""
        assert document.organization_id == acme_member.org_id
        assert document.created_by_id == acme_member.user_id
        assert document.last_edited_by_id == acme_member.user_id
        assert document.created_at == document.updated_at

    async def test_registers_with_sync_service(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_doc: str,
    ):
        assert document_sync.documents == {acme_doc: ""}

    @pytest.mark.parametrize("token", [None, "", "bogus-token"])
    async def test_requires_session(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_admin: AuthResult,
        token,
    ):
        with pytest.raises(UnauthorizedError):
            await create_document(async_session, document_sync, token, "Nope")
        assert document_sync.documents == {}

    async def test_expired_session_rejected(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_admin: AuthResult,
    ):
        user = await async_session.get(User, acme_admin.user_id)
        assert user is not None
        stale = await create_session(
            async_session, user, now=utc_now() - timedelta(days=7, seconds=1)
        )

        with pytest.raises(UnauthorizedError):
            await create_document(async_session, document_sync, stale.token, "Late")


class TestUpdateDocument:
    """Tests for update_document_content and update_document_title."""

    async def test_member_updates_title(
        self,
        async_session: AsyncSession,
        acme_doc: str,
        acme_member: AuthResult,
    ):
        before = await get_document(async_session, acme_member.token, acme_doc)
        assert before is not None

        await update_document_title(
            async_session, acme_member.token, acme_doc, "Roadmap v2"
        )
        await async_session.commit()

        after = await get_document(async_session, acme_member.token, acme_doc)
        assert after is not None
        assert after.title == "Roadmap v2"
        assert after.last_edited_by_id == acme_member.user_id
        assert after.last_edited_by_name == "Bob"
        assert after.created_by_name == "Alice"
        assert after.updated_at >= before.updated_at

    async def test_member_updates_content(
        self,
        async_session: AsyncSession,
        acme_doc: str,
        acme_member: AuthResult,
    ):
        await update_document_content(
            async_session, acme_member.token, acme_doc, '{"type":"doc"}'
        )
        await async_session.commit()

        document = await get_document(async_session, acme_member.token, acme_doc)
        assert document is not None
        assert document.content == '{"type":"doc"}'
        assert document.last_edited_by_id == acme_member.user_id

    async def test_last_writer_wins(
        self,
        async_session: AsyncSession,
        acme_doc: str,
        acme_admin: AuthResult,
        acme_member: AuthResult,
    ):
        await update_document_title(async_session, acme_member.token, acme_doc, "B")
        await update_document_title(async_session, acme_admin.token, acme_doc, "A")
        await async_session.commit()

        document = await get_document(async_session, acme_member.token, acme_doc)
        assert document is not None
        assert document.title == "A"
        assert document.last_edited_by_name == "Alice"

    async def test_anonymous_update_rejected(
        self, async_session: AsyncSession, acme_doc: str
    ):
        with pytest.raises(UnauthorizedError):
            await update_document_title(async_session, None, acme_doc, "x")
        with pytest.raises(UnauthorizedError):
            await update_document_content(async_session, None, acme_doc, "x")

    async def test_missing_document_is_unauthorized(
        self, async_session: AsyncSession, acme_admin: AuthResult
    ):
        with pytest.raises(UnauthorizedError):
            await update_document_title(
                async_session, acme_admin.token, "does-not-exist", "x"
            )


class TestDeleteDocument:
    """Tests for delete_document."""

    async def test_creator_can_delete(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_member: AuthResult,
    ):
        doc_id = await create_document(
            async_session, document_sync, acme_member.token, "Mine"
        )
        await delete_document(async_session, acme_member.token, doc_id)
        await async_session.commit()

        assert await get_document(async_session, acme_member.token, doc_id) is None

    async def test_admin_can_delete_any_document(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_admin: AuthResult,
        acme_member: AuthResult,
    ):
        doc_id = await create_document(
            async_session, document_sync, acme_member.token, "Bob's"
        )
        await delete_document(async_session, acme_admin.token, doc_id)
        await async_session.commit()

        assert await get_document(async_session, acme_admin.token, doc_id) is None

    async def test_other_member_is_forbidden(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_member: AuthResult,
        acme_other_member: AuthResult,
    ):
        doc_id = await create_document(
            async_session, document_sync, acme_member.token, "Bob's"
        )
        await async_session.commit()

        with pytest.raises(ForbiddenError):
            await delete_document(async_session, acme_other_member.token, doc_id)

        assert await get_document(async_session, acme_member.token, doc_id) is not None

    async def test_member_cannot_delete_admin_document(
        self,
        async_session: AsyncSession,
        acme_doc: str,
        acme_member: AuthResult,
    ):
        with pytest.raises(ForbiddenError):
            await delete_document(async_session, acme_member.token, acme_doc)

    async def test_anonymous_delete_is_unauthorized(
        self, async_session: AsyncSession, acme_doc: str
    ):
        with pytest.raises(UnauthorizedError):
            await delete_document(async_session, None, acme_doc)


class TestTenantIsolation:
    """A user can never see or touch another organization's documents."""

    async def test_get_returns_none(
        self, async_session: AsyncSession, acme_doc: str, globex_admin: AuthResult
    ):
        assert await get_document(async_session, globex_admin.token, acme_doc) is None

    async def test_list_excludes_other_tenants(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_doc: str,
        globex_admin: AuthResult,
    ):
        globex_doc = await create_document(
            async_session, document_sync, globex_admin.token, "Globex plan"
        )
        await async_session.commit()

        docs = await list_documents(async_session, globex_admin.token)
        assert [d.id for d in docs] == [globex_doc]

    async def test_mutations_are_unauthorized_not_forbidden(
        self, async_session: AsyncSession, acme_doc: str, globex_admin: AuthResult
    ):
        """Even an admin of another org gets Unauthorized, same as a missing id."""
        with pytest.raises(UnauthorizedError):
            await update_document_title(
                async_session, globex_admin.token, acme_doc, "Pwned"
            )
        with pytest.raises(UnauthorizedError):
            await update_document_content(
                async_session, globex_admin.token, acme_doc, "Pwned"
            )
        with pytest.raises(UnauthorizedError):
            await delete_document(async_session, globex_admin.token, acme_doc)

        document = await async_session.get(Document, acme_doc)
        assert document is not None
        assert document.title == "Roadmap"


class TestReads:
    """Tests for list_documents and get_document."""

    async def test_anonymous_reads_degrade(
        self, async_session: AsyncSession, acme_doc: str
    ):
        assert await list_documents(async_session, None) == []
        assert await list_documents(async_session, "bogus") == []
        assert await get_document(async_session, None, acme_doc) is None

    async def test_get_missing_document(
        self, async_session: AsyncSession, acme_admin: AuthResult
    ):
        assert await get_document(async_session, acme_admin.token, "missing") is None

    async def test_list_newest_first_with_names(
        self,
        async_session: AsyncSession,
        document_sync: InMemoryDocumentSync,
        acme_admin: AuthResult,
        acme_member: AuthResult,
    ):
        first = await create_document(
            async_session, document_sync, acme_admin.token, "First"
        )
        second = await create_document(
            async_session, document_sync, acme_member.token, "Second"
        )
        third = await create_document(
            async_session, document_sync, acme_admin.token, "Third"
        )
        await async_session.commit()

        docs = await list_documents(async_session, acme_member.token)
        assert [d.id for d in docs] == [third, second, first]
        by_id = {d.id: d for d in docs}
        assert by_id[second].created_by_name == "Bob"
        assert by_id[first].created_by_name == "Alice"
        assert by_id[first].last_edited_by_name == "Alice"

    async def test_unknown_user_placeholder(
        self,
        async_session: AsyncSession,
        acme_admin: AuthResult,
    ):
        document = Document(
            title="Imported",
            organization_id=acme_admin.org_id,
            created_by_id="ghost-user-id",
            last_edited_by_id=None,
        )
        async_session.add(document)
        await async_session.commit()

        view = await get_document(async_session, acme_admin.token, document.id)
        assert view is not None
        assert view.created_by_name == UNKNOWN_USER_NAME
        assert view.last_edited_by_name == UNKNOWN_USER_NAME
