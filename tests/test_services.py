from uuid import uuid4

import pytest

from domain.exceptions import (
    AuthenticationRequiredError,
    DocumentAccessDeniedError,
    DocumentError,
    DocumentNotFoundError,
    SelfShareError,
    ShareAlreadyExistsError,
    ShareNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.services.authorization import AccessLevel, Action, authorize
from domain.services.document_service import DocumentService
from domain.services.share_service import ShareService
from domain.services.user_service import UserService
from infrastructure.models.document_share_orm import DocumentShareORM
from infrastructure.repositories.sqlalchemy_document_repository import (
    SQLAlchemyDocumentRepository,
)
from infrastructure.repositories.sqlalchemy_share_repository import (
    SQLAlchemyShareRepository,
)
from infrastructure.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)


@pytest.fixture
def user_service():
    return UserService(SQLAlchemyUserRepository())


@pytest.fixture
def document_service():
    return DocumentService(SQLAlchemyDocumentRepository(), SQLAlchemyShareRepository())


@pytest.fixture
def share_service(document_service, user_service):
    return ShareService(document_service, SQLAlchemyShareRepository(), user_service)


@pytest.mark.asyncio
async def test_resolve_principal(db_session, user_service):
    created = await user_service.register(db_session, "ada@example.com", "Ada")

    resolved = await user_service.resolve_principal(db_session, "ADA@example.com")

    assert resolved.id == created.id


@pytest.mark.asyncio
async def test_resolve_principal_errors(db_session, user_service):
    with pytest.raises(AuthenticationRequiredError):
        await user_service.resolve_principal(db_session, None)
    with pytest.raises(AuthenticationRequiredError):
        await user_service.resolve_principal(db_session, "  ")
    with pytest.raises(UserNotFoundError):
        await user_service.resolve_principal(db_session, "ghost@example.com")


@pytest.mark.asyncio
async def test_register_duplicate_email(db_session, user_service):
    await user_service.register(db_session, "ada@example.com", "Ada")

    with pytest.raises(UserAlreadyExistsError):
        await user_service.register(db_session, "Ada@Example.com", "Other")


@pytest.mark.asyncio
async def test_document_lifecycle_with_grant(
    db_session, user_service, document_service, share_service
):
    alice = await user_service.register(db_session, "alice@example.com", "Alice")
    bob = await user_service.register(db_session, "bob@example.com", "Bob")

    document = await document_service.create_document(db_session, alice, "Notes")
    share = await share_service.share_document(
        db_session, alice, document.id, "bob@example.com"
    )

    assert share.user.email == "bob@example.com"
    assert (await document_service.get_document(db_session, bob, document.id)).id == (
        document.id
    )
    with pytest.raises(DocumentAccessDeniedError):
        await document_service.update_document(
            db_session, bob, document.id, "Bob's", "x"
        )

    await share_service.update_share_permission(
        db_session, alice, document.id, "bob@example.com", True
    )
    updated = await document_service.update_document(
        db_session, bob, document.id, "Bob's", "x"
    )
    assert updated.title == "Bob's"

    listing = await document_service.list_documents(db_session, bob)
    assert listing.owned == []
    assert [(s.document.id, s.can_edit) for s in listing.shared] == [
        (document.id, True)
    ]

    assert await document_service.delete_document(db_session, alice, document.id)
    with pytest.raises(DocumentNotFoundError):
        await document_service.get_document(db_session, alice, document.id)
    assert (
        db_session.query(DocumentShareORM)
        .filter(DocumentShareORM.document_id == document.id)
        .count()
        == 0
    )


@pytest.mark.asyncio
async def test_load_authorized_returns_grant(
    db_session, user_service, document_service, share_service
):
    alice = await user_service.register(db_session, "alice@example.com", "Alice")
    bob = await user_service.register(db_session, "bob@example.com", "Bob")
    document = await document_service.create_document(db_session, alice, "Notes")
    await share_service.share_document(
        db_session, alice, document.id, "bob@example.com", can_edit=True
    )

    _, owner_share = await document_service.load_authorized(
        db_session, alice, document.id, Action.DELETE
    )
    loaded, bob_share = await document_service.load_authorized(
        db_session, bob, document.id, Action.EDIT
    )

    assert owner_share is None
    assert bob_share.can_edit is True
    assert authorize(bob.id, loaded, Action.VIEW, bob_share) is AccessLevel.EDIT


@pytest.mark.asyncio
async def test_share_rules(db_session, user_service, document_service, share_service):
    alice = await user_service.register(db_session, "alice@example.com", "Alice")
    await user_service.register(db_session, "bob@example.com", "Bob")
    document = await document_service.create_document(db_session, alice, "Notes")

    with pytest.raises(SelfShareError):
        await share_service.share_document(
            db_session, alice, document.id, "alice@example.com"
        )

    await share_service.share_document(db_session, alice, document.id, "bob@example.com")
    with pytest.raises(ShareAlreadyExistsError):
        await share_service.share_document(
            db_session, alice, document.id, "bob@example.com", can_edit=True
        )

    assert len(await share_service.get_document_shares(db_session, alice, document.id)) == 1

    assert await share_service.unshare_document(
        db_session, alice, document.id, "bob@example.com"
    )
    with pytest.raises(ShareNotFoundError):
        await share_service.unshare_document(
            db_session, alice, document.id, "bob@example.com"
        )


class _BrokenDocumentRepository(SQLAlchemyDocumentRepository):
    async def get_owned_documents(self, db_session, owner_id):
        raise RuntimeError("connection lost")

    async def get_document_by_id(self, db_session, document_id):
        raise RuntimeError("connection lost")


@pytest.mark.asyncio
async def test_unexpected_failures_are_wrapped(db_session, user_service):
    alice = await user_service.register(db_session, "alice@example.com", "Alice")
    service = DocumentService(_BrokenDocumentRepository(), SQLAlchemyShareRepository())

    with pytest.raises(DocumentError) as listing_error:
        await service.list_documents(db_session, alice)
    with pytest.raises(DocumentError) as load_error:
        await service.get_document(db_session, alice, uuid4())

    assert type(listing_error.value) is DocumentError
    assert type(load_error.value) is DocumentError
    assert "connection lost" in str(load_error.value)
