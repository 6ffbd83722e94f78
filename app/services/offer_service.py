"""
Servicio de ofertas: respuesta del vendedor (aceptar / rechazar).
"""
import logging
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException
from app.core.permissions import ensure_offer_reviewer
from app.crud.offer import offer as crud_offer
from app.models.offer import Offer
from app.schemas.offer import OfferDecision

logger = logging.getLogger(__name__)


def decide_offer(
    db: Session, *, offer_id: int, user_id: str, decision: OfferDecision
) -> Offer:
    """
    Aceptar o rechazar una oferta.

    Solo el vendedor de la publicación puede responder, y solo las
    ofertas pending cambian de estado.

    Args:
        db: Sesión de base de datos
        offer_id: ID de la oferta
        user_id: ID del usuario autenticado
        decision: accepted o rejected

    Returns:
        Oferta actualizada

    Raises:
        NotFoundException: Si la oferta no existe
        ForbiddenException: Si el usuario no es el vendedor
        ConflictException: Si la oferta ya fue respondida
    """
    offer = ensure_offer_reviewer(crud_offer.get_with_listing(db, id=offer_id), user_id)

    if not offer.is_pending():
        raise ConflictException(f"La oferta ya fue respondida ({offer.status})")

    updated = crud_offer.update_status(db, db_obj=offer, status=decision)
    if updated is None:
        # Otra solicitud respondió la oferta entre la lectura y la escritura
        raise ConflictException("La oferta ya fue respondida")

    logger.info(f"Oferta {offer_id} marcada como {updated.status} por {user_id}")
    return updated
