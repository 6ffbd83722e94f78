"""
CRUD para conversaciones.
"""
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_, desc
from sqlalchemy.exc import IntegrityError
from pydantic import BaseModel
from app.crud.base import CRUDBase
from app.db.base import utcnow
from app.models.conversation import Conversation


class ConversationUpdate(BaseModel):
    """Las conversaciones no se editan desde la API."""
    pass


class CRUDConversation(CRUDBase[Conversation, BaseModel, ConversationUpdate]):
    """CRUD específico para conversaciones."""

    def get_with_details(self, db: Session, *, id: int) -> Optional[Conversation]:
        """
        Obtener conversación con publicación, comprador y vendedor cargados.

        Args:
            db: Sesión de base de datos
            id: ID de la conversación

        Returns:
            Conversación encontrada o None
        """
        return (
            db.query(Conversation)
            .options(
                joinedload(Conversation.listing),
                joinedload(Conversation.buyer),
                joinedload(Conversation.seller),
            )
            .filter(Conversation.id == id)
            .first()
        )

    def get_by_participants(
        self, db: Session, *, listing_id: int, buyer_id: str, seller_id: str
    ) -> Optional[Conversation]:
        """
        Obtener la conversación que coincide exactamente con la terna.

        Args:
            db: Sesión de base de datos
            listing_id: ID de la publicación
            buyer_id: ID del comprador
            seller_id: ID del vendedor

        Returns:
            Conversación encontrada o None
        """
        return db.query(Conversation).filter(
            Conversation.listing_id == listing_id,
            Conversation.buyer_id == buyer_id,
            Conversation.seller_id == seller_id
        ).first()

    def get_by_user(self, db: Session, *, user_id: str) -> List[Conversation]:
        """
        Obtener conversaciones donde el usuario es comprador o vendedor,
        de la actividad más reciente a la más antigua.

        Args:
            db: Sesión de base de datos
            user_id: ID del usuario

        Returns:
            Lista de conversaciones del usuario
        """
        return (
            db.query(Conversation)
            .options(
                joinedload(Conversation.listing),
                joinedload(Conversation.buyer),
                joinedload(Conversation.seller),
            )
            .filter(
                or_(
                    Conversation.buyer_id == user_id,
                    Conversation.seller_id == user_id
                )
            )
            .order_by(desc(Conversation.last_message_at), desc(Conversation.id))
            .all()
        )

    def create_conversation(
        self, db: Session, *, listing_id: int, buyer_id: str, seller_id: str
    ) -> Tuple[Conversation, bool]:
        """
        Obtener o crear la conversación de la terna (listing, buyer, seller).

        Si dos solicitudes concurrentes insertan la misma terna, la
        restricción única hace fallar a una de ellas; esa solicitud hace
        rollback y retorna la fila ganadora.

        Args:
            db: Sesión de base de datos
            listing_id: ID de la publicación
            buyer_id: ID del comprador
            seller_id: ID del vendedor

        Returns:
            Tupla (conversación, creada)
        """
        existing = self.get_by_participants(
            db, listing_id=listing_id, buyer_id=buyer_id, seller_id=seller_id
        )
        if existing:
            return existing, False

        now = utcnow()
        db_obj = Conversation(
            listing_id=listing_id,
            buyer_id=buyer_id,
            seller_id=seller_id,
            last_message_at=now,
            created_at=now,
        )
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            existing = self.get_by_participants(
                db, listing_id=listing_id, buyer_id=buyer_id, seller_id=seller_id
            )
            if existing is None:
                raise
            return existing, False

        db.refresh(db_obj)
        return db_obj, True


# Instancia global del CRUD
conversation = CRUDConversation(Conversation)
