"""
Endpoints de ofertas de compra.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.core.deps import get_db, get_current_user
from app.core.permissions import ensure_listing_owner, require_found
from app.crud.listing import listing as crud_listing
from app.crud.offer import offer as crud_offer
from app.schemas.offer import OfferCreate, OfferStatusUpdate, OfferResponse, OfferWithBuyer
from app.services.offer_service import decide_offer
from app.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/listings/{listing_id}/offers", response_model=List[OfferWithBuyer])
def get_listing_offers(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Obtener ofertas recibidas por una publicación.

    Requiere autenticación.
    Solo el vendedor de la publicación puede verlas.
    Retorna las más recientes primero.
    """
    ensure_listing_owner(
        crud_listing.get(db, listing_id),
        current_user.id,
        "No tienes permiso para ver las ofertas de esta publicación"
    )

    return crud_offer.get_by_listing(db, listing_id=listing_id)


@router.post(
    "/listings/{listing_id}/offers",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED
)
def create_offer(
    listing_id: int,
    offer_in: OfferCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Hacer una oferta sobre una publicación.

    Requiere autenticación. El comprador es el usuario autenticado y
    la oferta se crea en estado pending.
    """
    require_found(crud_listing.get(db, listing_id), "Publicación no encontrada")

    offer = crud_offer.create(
        db, obj_in=offer_in, listing_id=listing_id, buyer_id=current_user.id
    )
    logger.info(f"Oferta {offer.id} creada sobre publicación {listing_id} por {current_user.id}")
    return offer


@router.put("/offers/{offer_id}/status", response_model=OfferResponse)
def update_offer_status(
    offer_id: int,
    status_update: OfferStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Aceptar o rechazar una oferta.

    Requiere autenticación.
    - status: accepted | rejected (cualquier otro valor retorna 400)

    Solo el vendedor de la publicación puede responder y solo ofertas
    pending cambian de estado (409 en otro caso).
    """
    return decide_offer(
        db, offer_id=offer_id, user_id=current_user.id, decision=status_update.status
    )
