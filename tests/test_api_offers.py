from __future__ import annotations

from decimal import Decimal

import pytest


@pytest.fixture()
def listing(client, seller_headers, listing_payload) -> dict:
    response = client.post("/api/v1/listings", json=listing_payload(), headers=seller_headers)
    assert response.status_code == 201
    return response.json()


def _offer(client, headers, listing_id, amount="20.00", message=None):
    payload = {"amount": amount}
    if message is not None:
        payload["message"] = message
    return client.post(f"/api/v1/listings/{listing_id}/offers", json=payload, headers=headers)


def test_buyer_creates_pending_offer(client, buyer_headers, listing) -> None:
    response = _offer(client, buyer_headers, listing["id"], message="Would you take 20?")

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["buyer_id"] == "buyer-1"
    assert Decimal(body["amount"]) == Decimal("20.00")


def test_offer_amount_must_be_positive(client, buyer_headers, listing) -> None:
    assert _offer(client, buyer_headers, listing["id"], amount="0").status_code == 400


def test_offer_on_missing_listing(client, buyer_headers) -> None:
    assert _offer(client, buyer_headers, 999).status_code == 404


def test_only_seller_lists_offers_newest_first(client, seller_headers, buyer_headers, listing) -> None:
    older = _offer(client, buyer_headers, listing["id"], amount="15.00").json()
    newer = _offer(client, buyer_headers, listing["id"], amount="18.00").json()
    url = f"/api/v1/listings/{listing['id']}/offers"

    response = client.get(url, headers=seller_headers)

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [newer["id"], older["id"]]
    assert response.json()[0]["buyer"]["first_name"] == "Bea"
    assert client.get(url, headers=buyer_headers).status_code == 403


def test_seller_accepts_offer_once(client, seller_headers, buyer_headers, listing) -> None:
    offer = _offer(client, buyer_headers, listing["id"]).json()
    url = f"/api/v1/offers/{offer['id']}/status"

    accepted = client.put(url, json={"status": "accepted"}, headers=seller_headers)
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    again = client.put(url, json={"status": "rejected"}, headers=seller_headers)
    assert again.status_code == 409


def test_buyer_cannot_decide_offer(client, buyer_headers, listing) -> None:
    offer = _offer(client, buyer_headers, listing["id"]).json()

    response = client.put(
        f"/api/v1/offers/{offer['id']}/status", json={"status": "accepted"}, headers=buyer_headers
    )

    assert response.status_code == 403


@pytest.mark.parametrize("status", ["maybe", "pending", ""])
def test_invalid_status_leaves_offer_unchanged(client, seller_headers, buyer_headers, listing, status) -> None:
    offer = _offer(client, buyer_headers, listing["id"]).json()

    response = client.put(
        f"/api/v1/offers/{offer['id']}/status", json={"status": status}, headers=seller_headers
    )

    assert response.status_code == 400
    [stored] = client.get(f"/api/v1/listings/{listing['id']}/offers", headers=seller_headers).json()
    assert stored["status"] == "pending"


def test_decide_missing_offer(client, seller_headers) -> None:
    response = client.put("/api/v1/offers/999/status", json={"status": "accepted"}, headers=seller_headers)

    assert response.status_code == 404
