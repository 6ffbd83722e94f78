"""
Modelo ORM para Ofertas de compra sobre publicaciones.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint, Numeric
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow


OFFER_STATUSES = ("pending", "accepted", "rejected")


class Offer(Base):
    """Modelo de Ofertas de un comprador sobre una publicación."""

    __tablename__ = "offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    listing_id = Column(Integer, ForeignKey("listings.id"), nullable=False, index=True)
    buyer_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    message = Column(Text)
    status = Column(String(20), nullable=False, default='pending', index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount > 0', name='check_offer_amount_positive'),
        CheckConstraint(
            f"status IN ({', '.join(repr(s) for s in OFFER_STATUSES)})",
            name='check_offer_status_valid'
        ),
    )

    # Relationships
    listing = relationship("Listing", back_populates="offers")
    buyer = relationship("User", back_populates="offers", foreign_keys=[buyer_id])

    def __repr__(self):
        return f"<Offer {self.amount} on listing {self.listing_id} by {self.buyer_id}>"

    def is_pending(self) -> bool:
        """Verificar si la oferta sigue pendiente de respuesta."""
        return self.status == "pending"
