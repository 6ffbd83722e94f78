"""
Modelo ORM para Publicaciones (listings) con soporte para Soft Delete.
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, Text, Numeric, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base, SoftDeleteMixin, utcnow


class Listing(Base, SoftDeleteMixin):
    """Modelo de Publicaciones de artículos en venta con soporte para soft delete."""

    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    condition = Column(String(50), nullable=False)
    tags = Column(JSON)
    images = Column(JSON)
    seller_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    # is_active viene del SoftDeleteMixin
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Constraints
    __table_args__ = (
        CheckConstraint('price > 0', name='check_listing_price_positive'),
    )

    # Relationships
    seller = relationship("User", back_populates="listings", foreign_keys=[seller_id])
    conversations = relationship("Conversation", back_populates="listing")
    offers = relationship("Offer", back_populates="listing")

    def __repr__(self):
        return f"<Listing {self.title} by user {self.seller_id}>"

    def is_owned_by(self, user_id: str) -> bool:
        """Verificar si el usuario es el vendedor de la publicación."""
        return str(self.seller_id) == str(user_id)
