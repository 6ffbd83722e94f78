"""
Schemas para publicaciones (listings) y filtros de búsqueda.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from app.schemas.user import UserSummary, UserWithEmail


class ListingBase(BaseModel):
    """Schema base de publicación."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=10)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    condition: str = Field(..., min_length=1, max_length=50)
    tags: Optional[List[str]] = None
    images: Optional[List[str]] = None

    model_config = {"from_attributes": True}


class ListingCreate(ListingBase):
    """
    Schema para crear publicación.

    El vendedor se toma del usuario autenticado, nunca del cliente.
    """
    pass


class ListingUpdate(BaseModel):
    """Schema para actualizar publicación (actualización parcial)."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    condition: Optional[str] = Field(None, min_length=1, max_length=50)
    tags: Optional[List[str]] = None
    images: Optional[List[str]] = None
    is_featured: Optional[bool] = None

    model_config = {"from_attributes": True}

    @field_validator("title", "description", "price", "category", "condition", "is_featured")
    @classmethod
    def reject_explicit_null(cls, value):
        # Solo se ejecuta si el campo viene en el body
        if value is None:
            raise ValueError("El campo no puede ser nulo")
        return value


class ListingFilters(BaseModel):
    """
    Conjunto cerrado de filtros de búsqueda de publicaciones.

    Todos los filtros son opcionales y se combinan con AND. Claves
    desconocidas se rechazan.
    """

    category: Optional[str] = None
    price_min: Optional[Decimal] = Field(
        None, ge=0, validation_alias=AliasChoices("price_min", "priceMin")
    )
    price_max: Optional[Decimal] = Field(
        None, ge=0, validation_alias=AliasChoices("price_max", "priceMax")
    )
    condition: Optional[str] = None
    search: Optional[str] = None
    seller_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("seller_id", "sellerId")
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        # ?category= equivale a no filtrar
        if isinstance(value, str) and value.strip() == "":
            return None
        return value


class ListingResponse(BaseModel):
    """Schema de respuesta de publicación (listado, vendedor sin email)."""

    id: int
    title: str
    description: str
    price: Decimal
    category: str
    condition: str
    tags: Optional[List[str]] = None
    images: Optional[List[str]] = None
    seller_id: str
    is_featured: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    # Relaciones
    seller: Optional[UserSummary] = None

    model_config = {"from_attributes": True}


class ListingDetailResponse(ListingResponse):
    """Schema detallado de publicación (incluye email del vendedor)."""

    seller: Optional[UserWithEmail] = None


class ListingSummary(BaseModel):
    """Resumen de publicación usado en conversaciones."""

    id: int
    title: str
    images: Optional[List[str]] = None

    model_config = {"from_attributes": True}
