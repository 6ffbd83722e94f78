"""
Verificaciones de acceso.

Funciones sin estado que se evalúan antes de cada mutación o lectura
sensible. La existencia se verifica antes que el permiso: un recurso
inexistente produce 404 aunque el usuario tampoco tuviera acceso.
"""
from typing import Optional, TypeVar

from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.conversation import Conversation
from app.models.listing import Listing
from app.models.offer import Offer

T = TypeVar("T")


def require_found(entity: Optional[T], message: str = "Recurso no encontrado") -> T:
    """
    Verificar que la entidad exista.

    Raises:
        NotFoundException: Si la entidad es None
    """
    if entity is None:
        raise NotFoundException(message)
    return entity


def ensure_listing_owner(
    listing: Optional[Listing],
    user_id: str,
    message: str = "No tienes permiso para modificar esta publicación",
) -> Listing:
    """
    Verificar que el usuario sea el vendedor de la publicación.

    Args:
        listing: Publicación (o None si no existe)
        user_id: ID del usuario autenticado
        message: Mensaje del 403

    Returns:
        La publicación

    Raises:
        NotFoundException: Si la publicación no existe
        ForbiddenException: Si el usuario no es el vendedor
    """
    listing = require_found(listing, "Publicación no encontrada")
    if not listing.is_owned_by(user_id):
        raise ForbiddenException(message)
    return listing


def ensure_conversation_participant(
    conversation: Optional[Conversation],
    user_id: str,
    message: str = "No tienes acceso a esta conversación",
) -> Conversation:
    """
    Verificar que el usuario sea comprador o vendedor de la conversación.

    Raises:
        NotFoundException: Si la conversación no existe
        ForbiddenException: Si el usuario no participa
    """
    conversation = require_found(conversation, "Conversación no encontrada")
    if not conversation.has_participant(user_id):
        raise ForbiddenException(message)
    return conversation


def ensure_offer_reviewer(offer: Optional[Offer], user_id: str) -> Offer:
    """
    Verificar que el usuario sea el vendedor de la publicación ofertada.

    Raises:
        NotFoundException: Si la oferta no existe
        ForbiddenException: Si el usuario no es el vendedor
    """
    offer = require_found(offer, "Oferta no encontrada")
    ensure_listing_owner(
        offer.listing, user_id, "No tienes permiso para responder esta oferta"
    )
    return offer
