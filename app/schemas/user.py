"""
Schemas para usuarios.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserSummary(BaseModel):
    """Proyección pública de usuario (sin email)."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class UserWithEmail(UserSummary):
    """Proyección de usuario que incluye el email (detalle de publicación)."""

    email: Optional[str] = None


class UserUpsert(BaseModel):
    """
    Perfil entregado por el proveedor de identidad.

    Se construye a partir de los claims del token; el ID es el claim "sub".
    """

    id: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    profile_image_url: Optional[str] = Field(None, max_length=500)


class UserResponse(BaseModel):
    """Schema de respuesta de usuario (perfil propio)."""

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserPublicProfile(UserSummary):
    """Schema de perfil público de usuario (sin datos sensibles)."""

    created_at: Optional[datetime] = None
    active_listings: int = 0
