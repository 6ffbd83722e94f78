"""
Schemas para ofertas de compra.
"""
from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum

from app.schemas.user import UserSummary


class OfferStatus(str, Enum):
    """Enum de estados de oferta."""
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class OfferDecision(str, Enum):
    """Estados destino permitidos al responder una oferta."""
    accepted = "accepted"
    rejected = "rejected"


class OfferCreate(BaseModel):
    """
    Schema para crear oferta.

    El comprador se toma del usuario autenticado y la publicación de la ruta.
    """

    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    message: Optional[str] = Field(None, max_length=2000)

    model_config = {"from_attributes": True}


class OfferStatusUpdate(BaseModel):
    """Schema para aceptar o rechazar una oferta."""

    status: OfferDecision


class OfferResponse(BaseModel):
    """Schema de respuesta de oferta."""

    id: int
    listing_id: int
    buyer_id: str
    amount: Decimal
    message: Optional[str] = None
    status: OfferStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class OfferWithBuyer(OfferResponse):
    """Oferta con el perfil público del comprador."""

    buyer: Optional[UserSummary] = None
