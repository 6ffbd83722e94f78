"""
Modelo ORM para Usuarios.
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow


class User(Base):
    """
    Modelo de Usuarios del sistema.

    El ID lo emite el proveedor de identidad externo (claim "sub").
    Los usuarios se crean/actualizan mediante upsert y nunca se eliminan.
    """

    __tablename__ = "users"

    id = Column(String(255), primary_key=True)
    email = Column(String(255), unique=True, index=True)
    first_name = Column(String(255))
    last_name = Column(String(255))
    profile_image_url = Column(String(500))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    listings = relationship("Listing", back_populates="seller", foreign_keys="Listing.seller_id")
    offers = relationship("Offer", back_populates="buyer", foreign_keys="Offer.buyer_id")
    messages_sent = relationship("Message", back_populates="sender", foreign_keys="Message.sender_id")

    def __repr__(self):
        return f"<User {self.id}>"
