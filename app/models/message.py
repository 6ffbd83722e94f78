"""
Modelo ORM para Mensajes.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow


class Message(Base):
    """Modelo de Mensajes del chat. Inmutables una vez creados."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    sender_id = Column(String(255), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    __table_args__ = (
        CheckConstraint("length(content) > 0", name='check_message_content_not_empty'),
    )

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")
    sender = relationship("User", back_populates="messages_sent", foreign_keys=[sender_id])

    def __repr__(self):
        return f"<Message {self.id} from {self.sender_id}>"
