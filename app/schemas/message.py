"""
Schemas para mensajes.
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from app.schemas.user import UserSummary


class MessageCreate(BaseModel):
    """Schema para crear mensaje."""

    content: str = Field(..., min_length=1, max_length=5000)

    model_config = {"from_attributes": True}

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("El mensaje no puede estar vacío")
        return value


class MessageResponse(BaseModel):
    """Schema de respuesta de mensaje."""

    id: int
    conversation_id: int
    sender_id: str
    content: str
    created_at: datetime

    # Info adicional
    sender: Optional[UserSummary] = None

    model_config = {"from_attributes": True}
