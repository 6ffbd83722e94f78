"""
CRUD para ofertas de compra.
"""
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc
from pydantic import BaseModel
from app.crud.base import CRUDBase
from app.models.offer import Offer
from app.schemas.offer import OfferCreate, OfferDecision


class OfferUpdate(BaseModel):
    """Solo el estado de una oferta cambia, vía update_status."""
    pass


class CRUDOffer(CRUDBase[Offer, OfferCreate, OfferUpdate]):
    """CRUD específico para ofertas."""

    def create(self, db: Session, *, obj_in: OfferCreate, listing_id: int, buyer_id: str) -> Offer:
        """
        Crear oferta en estado pending.

        Args:
            db: Sesión de base de datos
            obj_in: Monto y mensaje opcional
            listing_id: ID de la publicación
            buyer_id: ID del usuario autenticado

        Returns:
            Oferta creada
        """
        return super().create(
            db, obj_in=obj_in, listing_id=listing_id, buyer_id=buyer_id, status="pending"
        )

    def get_with_listing(self, db: Session, *, id: int) -> Optional[Offer]:
        """Obtener oferta con su publicación cargada."""
        return (
            db.query(Offer)
            .options(joinedload(Offer.listing))
            .filter(Offer.id == id)
            .first()
        )

    def get_by_listing(self, db: Session, *, listing_id: int) -> List[Offer]:
        """
        Obtener ofertas de una publicación, de la más reciente a la más antigua.

        Args:
            db: Sesión de base de datos
            listing_id: ID de la publicación

        Returns:
            Lista de ofertas con comprador
        """
        return (
            db.query(Offer)
            .options(joinedload(Offer.buyer))
            .filter(Offer.listing_id == listing_id)
            .order_by(desc(Offer.created_at), desc(Offer.id))
            .all()
        )

    def update_status(self, db: Session, *, db_obj: Offer, status: OfferDecision) -> Optional[Offer]:
        """
        Responder una oferta solo si sigue en pending.

        El UPDATE lleva la condición status = 'pending', así que de dos
        respuestas concurrentes solo una modifica la fila.

        Args:
            db: Sesión de base de datos
            db_obj: Oferta a actualizar
            status: accepted o rejected

        Returns:
            Oferta actualizada, o None si ya no estaba pending
        """
        updated_rows = (
            db.query(Offer)
            .filter(Offer.id == db_obj.id, Offer.status == "pending")
            .update({"status": OfferDecision(status).value}, synchronize_session=False)
        )
        if updated_rows == 0:
            db.rollback()
            return None

        db.commit()
        db.refresh(db_obj)
        return db_obj


# Instancia global del CRUD
offer = CRUDOffer(Offer)
