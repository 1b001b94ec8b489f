from infrastructure.models.document_share_orm import DocumentShareORM


def _share(client, headers, document_id, email, can_edit=False):
    return client.post(
        f"/documents/{document_id}/share",
        json={"email": email, "can_edit": can_edit},
        headers=headers,
    )


def test_share_returns_grant_with_user_identity(client, alice, bob, alice_document):
    response = _share(client, alice, alice_document["id"], "bob@example.com")

    assert response.status_code == 201
    body = response.json()
    assert body["document_id"] == alice_document["id"]
    assert body["can_edit"] is False
    assert body["user"]["email"] == "bob@example.com"
    assert body["user"]["name"] == "Bob"
    assert body["user_id"] == body["user"]["id"]


def test_share_matches_email_case_insensitively(client, alice, bob, alice_document):
    response = _share(client, alice, alice_document["id"], "  BOB@Example.com ")

    assert response.status_code == 201
    assert response.json()["user"]["email"] == "bob@example.com"


def test_cannot_share_with_yourself(client, alice, alice_document):
    response = _share(client, alice, alice_document["id"], "alice@example.com")

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Cannot share with yourself",
        "error_code": "VALIDATION_ERROR",
    }


def test_share_requires_email(client, alice, alice_document):
    response = client.post(
        f"/documents/{alice_document['id']}/share", json={}, headers=alice
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email is required"


def test_share_with_unknown_user_is_not_found(client, alice, alice_document):
    response = _share(client, alice, alice_document["id"], "nobody@example.com")

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_duplicate_share_conflicts_and_keeps_one_row(
    client, alice, bob, alice_document, db_session
):
    first = _share(client, alice, alice_document["id"], "bob@example.com")
    second = _share(
        client, alice, alice_document["id"], "bob@example.com", can_edit=True
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error_code"] == "CONFLICT"
    assert db_session.query(DocumentShareORM).count() == 1

    shares = client.get(
        f"/documents/{alice_document['id']}/shares", headers=alice
    ).json()
    assert len(shares) == 1
    assert shares[0]["can_edit"] is False


def test_only_owner_manages_shares(client, alice, bob, carol, alice_document):
    doc_id = alice_document["id"]
    _share(client, alice, doc_id, "bob@example.com", can_edit=True)

    assert _share(client, bob, doc_id, "carol@example.com").status_code == 401
    assert (
        client.get(f"/documents/{doc_id}/shares", headers=bob).status_code == 401
    )
    assert (
        client.put(
            f"/documents/{doc_id}/shares/by-email/bob@example.com",
            json={"can_edit": False},
            headers=bob,
        ).status_code
        == 401
    )
    assert (
        client.delete(
            f"/documents/{doc_id}/shares/by-email/bob@example.com", headers=bob
        ).status_code
        == 401
    )


def test_list_shares(client, alice, bob, carol, alice_document):
    doc_id = alice_document["id"]
    _share(client, alice, doc_id, "bob@example.com")
    _share(client, alice, doc_id, "carol@example.com", can_edit=True)

    response = client.get(f"/documents/{doc_id}/shares", headers=alice)

    assert response.status_code == 200
    by_email = {share["user"]["email"]: share for share in response.json()}
    assert set(by_email) == {"bob@example.com", "carol@example.com"}
    assert by_email["bob@example.com"]["can_edit"] is False
    assert by_email["carol@example.com"]["can_edit"] is True
    assert by_email["carol@example.com"]["user"]["name"] == "Carol"


def test_list_shares_of_unshared_document_is_empty(client, alice, alice_document):
    response = client.get(f"/documents/{alice_document['id']}/shares", headers=alice)

    assert response.status_code == 200
    assert response.json() == []


def test_downgrade_removes_edit_right(client, alice, bob, alice_document):
    doc_url = f"/documents/{alice_document['id']}"
    _share(client, alice, alice_document["id"], "bob@example.com", can_edit=True)
    assert (
        client.put(doc_url, json={"title": "By Bob"}, headers=bob).status_code == 200
    )

    client.put(
        f"{doc_url}/shares/by-email/bob@example.com",
        json={"can_edit": False},
        headers=alice,
    )

    assert client.put(doc_url, json={"title": "Again"}, headers=bob).status_code == 401
    assert client.get(doc_url, headers=bob).json()["title"] == "By Bob"


def test_update_missing_share_is_not_found(client, alice, bob, alice_document):
    response = client.put(
        f"/documents/{alice_document['id']}/shares/by-email/bob@example.com",
        json={"can_edit": True},
        headers=alice,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Share not found"


def test_revoke_removes_all_access(client, alice, bob, alice_document):
    doc_url = f"/documents/{alice_document['id']}"
    _share(client, alice, alice_document["id"], "bob@example.com")

    response = client.delete(
        f"{doc_url}/shares/by-email/bob@example.com", headers=alice
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Document sharing removed successfully"}
    assert client.get(doc_url, headers=bob).status_code == 404
    assert client.get("/documents", headers=bob).json()["shared_documents"] == []


def test_revoke_twice_is_not_found(client, alice, bob, alice_document):
    url = f"/documents/{alice_document['id']}/shares/by-email/bob@example.com"
    _share(client, alice, alice_document["id"], "bob@example.com")

    assert client.delete(url, headers=alice).status_code == 200
    assert client.delete(url, headers=alice).status_code == 404


def test_reshare_after_revoke(client, alice, bob, alice_document):
    doc_id = alice_document["id"]
    _share(client, alice, doc_id, "bob@example.com")
    client.delete(
        f"/documents/{doc_id}/shares/by-email/bob@example.com", headers=alice
    )

    response = _share(client, alice, doc_id, "bob@example.com", can_edit=True)

    assert response.status_code == 201
    assert response.json()["can_edit"] is True


def test_share_missing_document_is_not_found(client, alice, bob):
    response = _share(
        client, alice, "22222222-2222-2222-2222-222222222222", "bob@example.com"
    )

    assert response.status_code == 404


def test_share_body_with_wrong_type_is_validation_error(
    client, alice, bob, alice_document
):
    response = client.post(
        f"/documents/{alice_document['id']}/share",
        json={"email": "bob@example.com", "can_edit": "maybe"},
        headers=alice,
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert response.json()["detail"].startswith("can_edit: ")
