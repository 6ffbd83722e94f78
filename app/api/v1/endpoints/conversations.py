"""
Endpoints de conversaciones (chat).
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.core.deps import get_db, get_current_user
from app.schemas.conversation import (
    ConversationCreate,
    ConversationResponse,
    ConversationWithDetails,
    ConversationDetailResponse,
)
from app.services import conversation_service
from app.models.user import User

router = APIRouter()


@router.get("", response_model=List[ConversationWithDetails])
def get_my_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Obtener conversaciones del usuario actual.

    Requiere autenticacion.
    Cada conversación incluye la publicación y el otro participante,
    ordenadas por último mensaje (más reciente primero).
    """
    return conversation_service.list_conversations_for_user(db, user_id=current_user.id)


@router.get("/{conversation_id}", response_model=ConversationDetailResponse)
def get_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Obtener detalle de una conversación específica.

    El usuario debe ser participante de la conversación.
    """
    return conversation_service.get_conversation_for_user(
        db, conversation_id=conversation_id, user_id=current_user.id
    )


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
def start_conversation(
    conversation_in: ConversationCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Iniciar una conversación sobre una publicación.

    El usuario autenticado es el comprador y el vendedor es el dueño de
    la publicación. Si la conversación ya existe se retorna con 200;
    si se crea, con 201.
    """
    conversation, created = conversation_service.start_conversation(
        db,
        listing_id=conversation_in.listing_id,
        buyer_id=current_user.id,
        seller_id=conversation_in.seller_id,
    )

    if not created:
        response.status_code = status.HTTP_200_OK

    return conversation
