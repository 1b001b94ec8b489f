import pytest

from infrastructure.models.document_share_orm import DocumentShareORM


def test_create_document_without_content_defaults_to_empty(client, alice):
    response = client.post("/documents", json={"title": "Untitled"}, headers=alice)

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Untitled"
    assert body["content"] == ""
    assert body["created_at"]
    assert body["updated_at"]


def test_create_document_owner_is_caller(client, alice):
    me = client.get("/users/me", headers=alice).json()

    response = client.post("/documents", json={"title": "Plan"}, headers=alice)

    assert response.json()["owner_id"] == me["id"]


@pytest.mark.parametrize("title", [None, "", "   "])
def test_create_document_requires_title(client, alice, title):
    response = client.post("/documents", json={"title": title}, headers=alice)

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Title is required",
        "error_code": "VALIDATION_ERROR",
    }


def test_create_document_strips_title(client, alice):
    response = client.post("/documents", json={"title": "  Plan  "}, headers=alice)

    assert response.json()["title"] == "Plan"


def test_content_is_stored_verbatim(client, alice):
    content = '  [{"type":"paragraph","children":[{"text":"Hi"}]}]\n'

    created = client.post(
        "/documents", json={"title": "Rich", "content": content}, headers=alice
    ).json()
    fetched = client.get(f"/documents/{created['id']}", headers=alice).json()

    assert fetched["content"] == content


def test_content_over_limit_is_rejected(client, alice, monkeypatch):
    monkeypatch.setattr("domain.entities.document.MAX_CONTENT_LENGTH", 10)

    response = client.post(
        "/documents", json={"title": "Big", "content": "x" * 11}, headers=alice
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_non_string_title_is_validation_error(client, alice):
    response = client.post("/documents", json={"title": 123}, headers=alice)

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["detail"].startswith("title: ")


def test_malformed_json_body_is_validation_error(client, alice):
    response = client.post(
        "/documents",
        content="{not json",
        headers={**alice, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_title_over_column_width_is_rejected(client, alice, alice_document):
    doc_url = f"/documents/{alice_document['id']}"

    created = client.post("/documents", json={"title": "t" * 256}, headers=alice)
    updated = client.put(doc_url, json={"title": "t" * 256}, headers=alice)

    for response in (created, updated):
        assert response.status_code == 400
        assert response.json() == {
            "detail": "Title exceeds maximum length of 255 characters",
            "error_code": "VALIDATION_ERROR",
        }
    assert client.get(doc_url, headers=alice).json()["title"] == "Notes"
    assert (
        client.post("/documents", json={"title": "t" * 255}, headers=alice).status_code
        == 201
    )


def test_stored_content_over_lowered_limit_stays_readable(
    client, alice, alice_document, monkeypatch
):
    monkeypatch.setattr("domain.entities.document.MAX_CONTENT_LENGTH", 2)
    doc_url = f"/documents/{alice_document['id']}"

    fetched = client.get(doc_url, headers=alice)
    listing = client.get("/documents", headers=alice)
    renamed = client.put(doc_url, json={"title": "Renamed"}, headers=alice)
    rewritten = client.put(
        doc_url, json={"title": "Renamed", "content": "too long"}, headers=alice
    )

    assert fetched.status_code == 200
    assert fetched.json()["content"] == "hello"
    assert listing.status_code == 200
    owned_ids = [d["id"] for d in listing.json()["owned_documents"]]
    assert owned_ids == [alice_document["id"]]
    assert renamed.status_code == 200
    assert renamed.json()["content"] == "hello"
    assert rewritten.status_code == 400


def test_owner_reads_document(client, alice, alice_document):
    response = client.get(f"/documents/{alice_document['id']}", headers=alice)

    assert response.status_code == 200
    assert response.json()["title"] == "Notes"
    assert response.json()["content"] == "hello"


def test_unknown_and_malformed_ids_are_not_found(client, alice):
    missing = client.get(
        "/documents/11111111-1111-1111-1111-111111111111", headers=alice
    )
    malformed = client.get("/documents/not-a-uuid", headers=alice)

    assert missing.status_code == 404
    assert malformed.status_code == 404
    assert malformed.json()["error_code"] == "NOT_FOUND"


def test_update_replaces_title_and_content(client, alice, alice_document):
    response = client.put(
        f"/documents/{alice_document['id']}",
        json={"title": "Renamed", "content": "new body"},
        headers=alice,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Renamed"
    assert body["content"] == "new body"


def test_update_without_content_keeps_stored_content(client, alice, alice_document):
    response = client.put(
        f"/documents/{alice_document['id']}", json={"title": "Renamed"}, headers=alice
    )

    assert response.json()["content"] == "hello"


def test_update_with_empty_content_clears_it(client, alice, alice_document):
    response = client.put(
        f"/documents/{alice_document['id']}",
        json={"title": "Notes", "content": ""},
        headers=alice,
    )

    assert response.json()["content"] == ""


def test_update_requires_title(client, alice, alice_document):
    response = client.put(
        f"/documents/{alice_document['id']}", json={"content": "x"}, headers=alice
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Title is required"


def test_list_separates_owned_and_shared(client, alice, bob, alice_document):
    client.post("/documents", json={"title": "Bob's"}, headers=bob)
    client.post(
        f"/documents/{alice_document['id']}/share",
        json={"email": "bob@example.com", "can_edit": True},
        headers=alice,
    )

    listing = client.get("/documents", headers=bob).json()

    assert [d["title"] for d in listing["owned_documents"]] == ["Bob's"]
    assert len(listing["shared_documents"]) == 1
    shared = listing["shared_documents"][0]
    assert shared["id"] == alice_document["id"]
    assert shared["can_edit"] is True


def test_list_for_new_user_is_empty(client, carol):
    response = client.get("/documents", headers=carol)

    assert response.status_code == 200
    assert response.json() == {"owned_documents": [], "shared_documents": []}


def test_stranger_sees_not_found_everywhere(client, alice, carol, alice_document):
    doc_url = f"/documents/{alice_document['id']}"

    assert client.get(doc_url, headers=carol).status_code == 404
    assert client.put(doc_url, json={"title": "x"}, headers=carol).status_code == 404
    assert client.delete(doc_url, headers=carol).status_code == 404
    assert client.get(f"{doc_url}/shares", headers=carol).status_code == 404
    assert (
        client.post(
            f"{doc_url}/share", json={"email": "alice@example.com"}, headers=carol
        ).status_code
        == 404
    )

    # Still intact for the owner
    assert client.get(doc_url, headers=alice).json()["title"] == "Notes"


def test_delete_removes_document_and_its_shares(
    client, alice, bob, carol, alice_document, db_session
):
    doc_url = f"/documents/{alice_document['id']}"
    client.post(f"{doc_url}/share", json={"email": "bob@example.com"}, headers=alice)
    client.post(
        f"{doc_url}/share",
        json={"email": "carol@example.com", "can_edit": True},
        headers=alice,
    )

    response = client.delete(doc_url, headers=alice)

    assert response.status_code == 200
    assert response.json() == {"message": "Document deleted successfully"}
    assert client.get(doc_url, headers=alice).status_code == 404
    assert db_session.query(DocumentShareORM).count() == 0


def test_view_edit_upgrade_delete_scenario(client, alice, bob, db_session):
    created = client.post("/documents", json={"title": "Notes"}, headers=alice)
    doc_id = created.json()["id"]
    doc_url = f"/documents/{doc_id}"

    share = client.post(
        f"{doc_url}/share",
        json={"email": "bob@example.com", "can_edit": False},
        headers=alice,
    )
    assert share.status_code == 201

    # View-only grantee can read but not write
    assert client.get(doc_url, headers=bob).status_code == 200
    denied = client.put(doc_url, json={"title": "Notes", "content": "x"}, headers=bob)
    assert denied.status_code == 401
    assert denied.json()["error_code"] == "UNAUTHORIZED"

    upgraded = client.put(
        f"{doc_url}/shares/by-email/bob@example.com",
        json={"can_edit": True},
        headers=alice,
    )
    assert upgraded.status_code == 200
    assert upgraded.json()["can_edit"] is True

    edited = client.put(doc_url, json={"title": "Notes", "content": "x"}, headers=bob)
    assert edited.status_code == 200
    assert edited.json()["content"] == "x"

    # Editors still cannot delete
    assert client.delete(doc_url, headers=bob).status_code == 401

    assert client.delete(doc_url, headers=alice).status_code == 200
    assert client.get(doc_url, headers=alice).status_code == 404
    assert client.get(doc_url, headers=bob).status_code == 404
    assert client.get("/documents", headers=bob).json()["shared_documents"] == []
    assert db_session.query(DocumentShareORM).count() == 0
