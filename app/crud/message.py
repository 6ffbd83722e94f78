"""
CRUD para mensajes.
"""
from typing import List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel
from app.crud.base import CRUDBase
from app.db.base import utcnow
from app.models.conversation import Conversation
from app.models.message import Message
from app.schemas.message import MessageCreate


class MessageUpdate(BaseModel):
    """Los mensajes son inmutables."""
    pass


class CRUDMessage(CRUDBase[Message, MessageCreate, MessageUpdate]):
    """CRUD específico para mensajes."""

    def create_message(
        self, db: Session, *, obj_in: MessageCreate, conversation: Conversation, sender_id: str
    ) -> Message:
        """
        Crear mensaje y mover last_message_at de la conversación.

        Ambas escrituras van en la misma transacción: o se confirman las
        dos o ninguna. last_message_at queda igual a created_at del mensaje.

        Args:
            db: Sesión de base de datos
            obj_in: Datos del mensaje
            conversation: Conversación destino
            sender_id: ID del usuario remitente

        Returns:
            Mensaje creado
        """
        now = utcnow()
        db_obj = Message(
            conversation_id=conversation.id,
            sender_id=sender_id,
            content=obj_in.content,
            created_at=now,
        )
        try:
            db.add(db_obj)
            conversation.last_message_at = now
            db.add(conversation)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

        db.refresh(db_obj)
        return db_obj

    def get_by_conversation(self, db: Session, *, conversation_id: int) -> List[Message]:
        """
        Obtener mensajes de una conversación en orden cronológico,
        con el perfil del remitente.

        Args:
            db: Sesión de base de datos
            conversation_id: ID de la conversación

        Returns:
            Lista de mensajes
        """
        return (
            db.query(Message)
            .options(joinedload(Message.sender))
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.created_at, Message.id)
            .all()
        )


# Instancia global del CRUD
message = CRUDMessage(Message)
