"""
Endpoints de mensajes (chat).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.core.deps import get_db, get_current_user
from app.core.permissions import ensure_conversation_participant
from app.crud.conversation import conversation as crud_conversation
from app.crud.message import message as crud_message
from app.schemas.message import MessageCreate, MessageResponse
from app.models.user import User

router = APIRouter()


@router.get("/conversations/{conversation_id}/messages", response_model=List[MessageResponse])
def get_conversation_messages(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Obtener mensajes de una conversacion en orden cronologico.

    Requiere autenticacion.
    El usuario debe ser participante de la conversación.
    """
    ensure_conversation_participant(
        crud_conversation.get(db, conversation_id),
        current_user.id,
        "No tienes acceso a los mensajes de esta conversación"
    )

    return crud_message.get_by_conversation(db, conversation_id=conversation_id)


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED
)
def send_message(
    conversation_id: int,
    message_in: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Enviar un mensaje en una conversación.

    El usuario debe ser participante de la conversación. El mensaje y la
    actualización de last_message_at se guardan en una sola transacción.
    """
    conversation = ensure_conversation_participant(
        crud_conversation.get(db, conversation_id),
        current_user.id,
        "No tienes permiso para enviar mensajes en esta conversación"
    )

    return crud_message.create_message(
        db, obj_in=message_in, conversation=conversation, sender_id=current_user.id
    )
