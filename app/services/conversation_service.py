"""
Servicio de conversaciones: obtener-o-crear por terna y vistas relativas
al usuario que consulta.
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestException
from app.core.permissions import ensure_conversation_participant, require_found
from app.crud.conversation import conversation as crud_conversation
from app.crud.listing import listing as crud_listing
from app.models.conversation import Conversation
from app.schemas.conversation import ConversationDetailResponse, ConversationWithDetails
from app.schemas.user import UserSummary

logger = logging.getLogger(__name__)


def find_or_create_conversation(
    db: Session, *, listing_id: int, buyer_id: str, seller_id: str
) -> Tuple[Conversation, bool]:
    """
    Obtener la conversación de la terna o crearla si no existe.

    Una conversación existente se retorna sin modificar (no mueve
    last_message_at). Un usuario no puede conversar consigo mismo.

    Args:
        db: Sesión de base de datos
        listing_id: ID de la publicación
        buyer_id: ID del comprador
        seller_id: ID del vendedor

    Returns:
        Tupla (conversación, creada)

    Raises:
        BadRequestException: Si comprador y vendedor son el mismo usuario
    """
    if str(buyer_id) == str(seller_id):
        raise BadRequestException("No puedes iniciar una conversación contigo mismo")

    conversation, created = crud_conversation.create_conversation(
        db, listing_id=listing_id, buyer_id=buyer_id, seller_id=seller_id
    )
    if created:
        logger.info(
            f"Conversación {conversation.id} creada: listing={listing_id} "
            f"buyer={buyer_id} seller={seller_id}"
        )
    return conversation, created


def start_conversation(
    db: Session, *, listing_id: int, buyer_id: str, seller_id: Optional[str] = None
) -> Tuple[Conversation, bool]:
    """
    Iniciar conversación desde la API: el vendedor es el de la publicación.

    Args:
        db: Sesión de base de datos
        listing_id: ID de la publicación
        buyer_id: ID del usuario autenticado
        seller_id: Vendedor indicado por el cliente (opcional)

    Returns:
        Tupla (conversación, creada)

    Raises:
        NotFoundException: Si la publicación no existe
        BadRequestException: Si seller_id no coincide con el vendedor
    """
    listing = require_found(crud_listing.get(db, listing_id), "Publicación no encontrada")

    if seller_id is not None and str(seller_id) != str(listing.seller_id):
        raise BadRequestException("El vendedor no corresponde a la publicación")

    return find_or_create_conversation(
        db, listing_id=listing.id, buyer_id=buyer_id, seller_id=listing.seller_id
    )


def to_conversation_view(conversation: Conversation, user_id: str) -> ConversationWithDetails:
    """
    Construir la vista de conversación relativa al usuario.

    Args:
        conversation: Conversación con listing, buyer y seller cargados
        user_id: Usuario que consulta

    Returns:
        Conversación con publicación y el otro participante
    """
    view = ConversationWithDetails.model_validate(conversation)
    other_user = conversation.get_other_user(user_id)
    view.other_user = UserSummary.model_validate(other_user) if other_user else None
    return view


def list_conversations_for_user(db: Session, *, user_id: str) -> List[ConversationWithDetails]:
    """
    Obtener las conversaciones del usuario, de la más reciente a la más antigua.

    Args:
        db: Sesión de base de datos
        user_id: ID del usuario

    Returns:
        Lista de conversaciones con publicación y otro participante
    """
    return [
        to_conversation_view(conv, user_id)
        for conv in crud_conversation.get_by_user(db, user_id=user_id)
    ]


def get_conversation_for_user(
    db: Session, *, conversation_id: int, user_id: str
) -> ConversationDetailResponse:
    """
    Obtener el detalle de una conversación verificando que el usuario participe.

    Raises:
        NotFoundException: Si la conversación no existe
        ForbiddenException: Si el usuario no participa
    """
    conversation = ensure_conversation_participant(
        crud_conversation.get_with_details(db, id=conversation_id), user_id
    )
    view = ConversationDetailResponse.model_validate(conversation)
    other_user = conversation.get_other_user(user_id)
    view.other_user = UserSummary.model_validate(other_user) if other_user else None
    return view
