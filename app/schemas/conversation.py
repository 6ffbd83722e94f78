"""
Schemas para conversaciones.
"""
from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime

from app.schemas.listing import ListingSummary
from app.schemas.user import UserSummary


class ConversationCreate(BaseModel):
    """
    Schema para iniciar (o recuperar) una conversación sobre una publicación.

    El comprador es el usuario autenticado. El vendedor se deduce de la
    publicación; si el cliente lo envía, debe coincidir.
    """

    listing_id: int = Field(..., validation_alias=AliasChoices("listing_id", "listingId"))
    seller_id: Optional[str] = Field(None, validation_alias=AliasChoices("seller_id", "sellerId"))


class ConversationResponse(BaseModel):
    """Schema de respuesta de conversación."""

    id: int
    listing_id: int
    buyer_id: str
    seller_id: str
    last_message_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ConversationWithDetails(ConversationResponse):
    """Conversación con la publicación y el otro participante."""

    listing: Optional[ListingSummary] = None
    other_user: Optional[UserSummary] = None


class ConversationDetailResponse(ConversationWithDetails):
    """Detalle de conversación con ambos participantes."""

    buyer: Optional[UserSummary] = None
    seller: Optional[UserSummary] = None
