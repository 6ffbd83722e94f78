"""
Modelo ORM para Conversaciones.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow


class Conversation(Base):
    """
    Modelo de Conversaciones entre comprador y vendedor sobre una publicación.

    Existe como máximo una conversación por terna (listing, buyer, seller);
    la unicidad la garantiza la base de datos.
    """

    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    listing_id = Column(Integer, ForeignKey("listings.id"), nullable=False, index=True)
    buyer_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    seller_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    last_message_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint('listing_id', 'buyer_id', 'seller_id', name='uq_conversation_participants'),
    )

    # Relationships
    listing = relationship("Listing", back_populates="conversations")
    buyer = relationship("User", foreign_keys=[buyer_id])
    seller = relationship("User", foreign_keys=[seller_id])
    messages = relationship("Message", back_populates="conversation", order_by="Message.created_at")

    def __repr__(self):
        return f"<Conversation {self.id} between {self.buyer_id} and {self.seller_id}>"

    def has_participant(self, user_id: str) -> bool:
        """Verificar si el usuario es comprador o vendedor de la conversación."""
        return str(user_id) in (str(self.buyer_id), str(self.seller_id))

    def get_other_user_id(self, current_user_id: str) -> str:
        """Obtener el ID del otro participante de la conversación."""
        return str(self.seller_id) if str(self.buyer_id) == str(current_user_id) else str(self.buyer_id)

    def get_other_user(self, current_user_id: str):
        """Obtener el otro participante (User) relativo al usuario dado."""
        return self.seller if str(self.buyer_id) == str(current_user_id) else self.buyer
