from __future__ import annotations

from decimal import Decimal

import pytest

from app.core.exceptions import ConflictException, ForbiddenException
from app.crud.offer import offer as crud_offer
from app.models import Offer
from app.schemas.offer import OfferCreate, OfferDecision
from app.services.offer_service import decide_offer


@pytest.fixture()
def pending_offer(db, make_user, make_listing) -> Offer:
    make_user("seller")
    make_user("buyer")
    listing = make_listing("seller", title="Desk")
    return crud_offer.create(
        db, obj_in=OfferCreate(amount=Decimal("30.00")), listing_id=listing.id, buyer_id="buyer"
    )


def test_seller_decision_is_persisted(db, pending_offer) -> None:
    decided = decide_offer(
        db, offer_id=pending_offer.id, user_id="seller", decision=OfferDecision.rejected
    )

    assert decided.status == "rejected"


def test_buyer_cannot_decide(db, pending_offer) -> None:
    with pytest.raises(ForbiddenException):
        decide_offer(db, offer_id=pending_offer.id, user_id="buyer", decision=OfferDecision.accepted)


def test_concurrent_decisions_only_first_wins(session_factory, pending_offer) -> None:
    first = session_factory()
    second = session_factory()
    try:
        # Ambas solicitudes leen la oferta mientras sigue pending
        assert crud_offer.get_with_listing(first, id=pending_offer.id).status == "pending"
        assert crud_offer.get_with_listing(second, id=pending_offer.id).status == "pending"

        decide_offer(first, offer_id=pending_offer.id, user_id="seller", decision=OfferDecision.accepted)
        with pytest.raises(ConflictException):
            decide_offer(
                second, offer_id=pending_offer.id, user_id="seller", decision=OfferDecision.rejected
            )
    finally:
        first.close()
        second.close()

    check = session_factory()
    try:
        assert check.get(Offer, pending_offer.id).status == "accepted"
    finally:
        check.close()


def test_update_status_skips_already_decided_offer(db, pending_offer) -> None:
    assert crud_offer.update_status(db, db_obj=pending_offer, status=OfferDecision.accepted) is not None

    assert crud_offer.update_status(db, db_obj=pending_offer, status=OfferDecision.rejected) is None
    db.expire_all()
    assert db.get(Offer, pending_offer.id).status == "accepted"
