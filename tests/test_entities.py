from datetime import datetime
from uuid import uuid4

import pytest

from domain.entities.document import Document
from domain.entities.user import User, normalize_email
from domain.exceptions import DocumentValidationError


def test_new_document_defaults_to_empty_content():
    document = Document.create_new(title="Notes", owner_id=uuid4())

    assert document.content == ""
    assert document.created_at == document.updated_at


@pytest.mark.parametrize("title", [None, "", " \t "])
def test_document_requires_title(title):
    with pytest.raises(DocumentValidationError, match="Title is required"):
        Document.create_new(title=title, owner_id=uuid4())


def test_update_content_keeps_content_when_omitted():
    document = Document.create_new(title="Notes", owner_id=uuid4(), content="body")
    created_at = document.created_at

    document.update_content(title=" Renamed ")

    assert document.title == "Renamed"
    assert document.content == "body"
    assert document.updated_at >= created_at


def test_update_content_rejects_blank_title():
    document = Document.create_new(title="Notes", owner_id=uuid4())

    with pytest.raises(DocumentValidationError):
        document.update_content(title="  ", content="x")

    assert document.title == "Notes"


def test_content_limit(monkeypatch):
    monkeypatch.setattr("domain.entities.document.MAX_CONTENT_LENGTH", 5)

    Document.create_new(title="Ok", owner_id=uuid4(), content="12345")
    with pytest.raises(DocumentValidationError):
        Document.create_new(title="Big", owner_id=uuid4(), content="123456")


def test_is_owned_by():
    owner = uuid4()
    document = Document.create_new(title="Notes", owner_id=owner)

    assert document.is_owned_by(owner)
    assert not document.is_owned_by(uuid4())


def test_user_email_is_normalized():
    user = User.create_new(email="  Ada@Example.COM", name=" Ada ")

    assert user.email == "ada@example.com"
    assert user.name == "Ada"
    assert normalize_email(" X@Y.Z ") == "x@y.z"


def test_user_requires_email():
    with pytest.raises(DocumentValidationError):
        User.create_new(email="  ", name="Nobody")


def test_user_equality_ignores_created_at():
    user_id = uuid4()

    assert User(user_id, "a@b.c", "A", created_at=datetime.utcnow()) == User(
        user_id, "a@b.c", "A"
    )


def test_title_limit_applies_on_create_and_update():
    with pytest.raises(DocumentValidationError, match="Title exceeds"):
        Document.create_new(title="t" * 256, owner_id=uuid4())

    document = Document.create_new(title="t" * 255, owner_id=uuid4(), content="body")
    with pytest.raises(DocumentValidationError):
        document.update_content(title="Renamed", content="x" * 2_000_000)

    assert document.title == "t" * 255
    assert document.content == "body"


def test_loaded_document_is_not_revalidated(monkeypatch):
    monkeypatch.setattr("domain.entities.document.MAX_CONTENT_LENGTH", 2)
    now = datetime.utcnow()

    document = Document(
        id=uuid4(),
        title="Notes",
        content="longer than the limit",
        owner_id=uuid4(),
        created_at=now,
        updated_at=now,
    )

    assert document.content == "longer than the limit"
