from __future__ import annotations

import pytest

CONVERSATIONS_URL = "/api/v1/conversations"


@pytest.fixture()
def listing(client, seller_headers, listing_payload) -> dict:
    response = client.post("/api/v1/listings", json=listing_payload(), headers=seller_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def outsider_headers(auth_headers) -> dict:
    return auth_headers("outsider-1", email="outsider@example.com", first_name="Olga")


def _start(client, headers, listing_id):
    return client.post(CONVERSATIONS_URL, json={"listingId": listing_id}, headers=headers)


def test_start_conversation_is_idempotent(client, buyer_headers, listing) -> None:
    first = _start(client, buyer_headers, listing["id"])
    second = _start(client, buyer_headers, listing["id"])

    assert first.status_code == 201
    assert second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert first.json()["buyer_id"] == "buyer-1"
    assert first.json()["seller_id"] == "seller-1"
    assert second.json()["last_message_at"] == first.json()["last_message_at"]


def test_start_conversation_on_missing_listing(client, buyer_headers) -> None:
    assert _start(client, buyer_headers, 999).status_code == 404


def test_seller_cannot_start_conversation_with_themselves(client, seller_headers, listing) -> None:
    assert _start(client, seller_headers, listing["id"]).status_code == 400


def test_seller_mismatch_is_rejected(client, buyer_headers, listing) -> None:
    response = client.post(
        CONVERSATIONS_URL,
        json={"listing_id": listing["id"], "seller_id": "someone-else"},
        headers=buyer_headers,
    )

    assert response.status_code == 400


def test_each_participant_sees_the_other(client, buyer_headers, seller_headers, listing) -> None:
    conversation_id = _start(client, buyer_headers, listing["id"]).json()["id"]

    [buyer_view] = client.get(CONVERSATIONS_URL, headers=buyer_headers).json()
    [seller_view] = client.get(CONVERSATIONS_URL, headers=seller_headers).json()

    assert buyer_view["id"] == seller_view["id"] == conversation_id
    assert buyer_view["other_user"]["id"] == "seller-1"
    assert seller_view["other_user"]["id"] == "buyer-1"
    assert buyer_view["listing"]["title"] == listing["title"]


def test_conversation_detail_is_participant_only(
    client, buyer_headers, seller_headers, outsider_headers, listing
) -> None:
    conversation_id = _start(client, buyer_headers, listing["id"]).json()["id"]
    url = f"{CONVERSATIONS_URL}/{conversation_id}"

    detail = client.get(url, headers=seller_headers)
    assert detail.status_code == 200
    assert detail.json()["other_user"]["first_name"] == "Bea"
    assert detail.json()["buyer"]["id"] == "buyer-1"

    assert client.get(url, headers=outsider_headers).status_code == 403
    assert client.get(f"{CONVERSATIONS_URL}/999", headers=buyer_headers).status_code == 404


def test_outsider_sees_no_conversations(client, buyer_headers, outsider_headers, listing) -> None:
    _start(client, buyer_headers, listing["id"])

    assert client.get(CONVERSATIONS_URL, headers=outsider_headers).json() == []


def test_messages_flow(client, buyer_headers, seller_headers, listing) -> None:
    conversation_id = _start(client, buyer_headers, listing["id"]).json()["id"]
    url = f"/api/v1/conversations/{conversation_id}/messages"

    first = client.post(url, json={"content": "Is it still available?"}, headers=buyer_headers)
    reply = client.post(url, json={"content": "Yes!"}, headers=seller_headers)

    assert first.status_code == 201
    assert reply.status_code == 201
    assert first.json()["sender_id"] == "buyer-1"

    messages = client.get(url, headers=seller_headers).json()
    assert [item["content"] for item in messages] == ["Is it still available?", "Yes!"]
    assert messages[1]["sender"]["first_name"] == "Sam"

    conversation = client.get(f"{CONVERSATIONS_URL}/{conversation_id}", headers=buyer_headers).json()
    assert conversation["last_message_at"] == reply.json()["created_at"]


def test_blank_message_is_rejected(client, buyer_headers, listing) -> None:
    conversation_id = _start(client, buyer_headers, listing["id"]).json()["id"]

    response = client.post(
        f"/api/v1/conversations/{conversation_id}/messages",
        json={"content": "   "},
        headers=buyer_headers,
    )

    assert response.status_code == 400


def test_outsider_cannot_read_or_write_messages(client, buyer_headers, outsider_headers, listing) -> None:
    conversation_id = _start(client, buyer_headers, listing["id"]).json()["id"]
    url = f"/api/v1/conversations/{conversation_id}/messages"

    assert client.get(url, headers=outsider_headers).status_code == 403
    assert client.post(url, json={"content": "hi"}, headers=outsider_headers).status_code == 403
    assert client.get(url, headers=buyer_headers).json() == []
