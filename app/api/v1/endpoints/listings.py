"""
Endpoints de publicaciones.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.core.deps import get_db, get_current_user, get_listing_filters
from app.core.permissions import ensure_listing_owner, require_found
from app.crud.listing import listing as crud_listing
from app.schemas.listing import (
    ListingCreate,
    ListingUpdate,
    ListingFilters,
    ListingResponse,
    ListingDetailResponse,
)
from app.schemas.common import MessageResponse
from app.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ListingResponse])
def get_listings(
    filters: ListingFilters = Depends(get_listing_filters),
    db: Session = Depends(get_db)
):
    """
    Obtener publicaciones activas (feed principal).

    Parametros (todos opcionales, se combinan con AND):
    - category: Categoría exacta
    - price_min / price_max: Rango de precio inclusivo
    - condition: Estado exacto
    - search: Texto en título o descripción (sin distinguir mayúsculas)
    - seller_id: Publicaciones de un vendedor

    No requiere autenticacion.
    Retorna todas las coincidencias, las más recientes primero.
    """
    return crud_listing.get_listings(db, filters=filters)


@router.get("/featured", response_model=List[ListingResponse])
def get_featured_listings(db: Session = Depends(get_db)):
    """
    Obtener publicaciones destacadas (máximo 4).

    No requiere autenticacion.
    """
    return crud_listing.get_featured(db)


@router.get("/{listing_id}", response_model=ListingDetailResponse)
def get_listing(
    listing_id: int,
    db: Session = Depends(get_db)
):
    """
    Obtener detalle de una publicación, esté activa o no.

    Incluye el email del vendedor.
    No requiere autenticación.
    """
    return require_found(
        crud_listing.get_with_seller(db, id=listing_id),
        "Publicación no encontrada"
    )


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
def create_listing(
    listing_in: ListingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Crear nueva publicación.

    Requiere autenticación. El vendedor es el usuario autenticado.

    Campos requeridos:
    - title: Título (1-255 caracteres)
    - description: Descripción (mín 10 caracteres)
    - price: Precio mayor a 0 (2 decimales)
    - category: Categoría
    - condition: Estado del artículo

    Campos opcionales:
    - tags: Lista de etiquetas
    - images: Lista de URLs de imágenes
    """
    listing = crud_listing.create(db, obj_in=listing_in, seller_id=current_user.id)
    logger.info(f"Publicación {listing.id} creada por {current_user.id}")
    return listing


@router.put("/{listing_id}", response_model=ListingResponse)
def update_listing(
    listing_id: int,
    listing_update: ListingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Actualizar publicación existente (actualización parcial).

    Requiere autenticación.
    Solo el vendedor de la publicación puede actualizarla.
    """
    listing = ensure_listing_owner(
        crud_listing.get(db, listing_id),
        current_user.id,
        "No tienes permiso para editar esta publicación"
    )

    updated_listing = crud_listing.update(db, db_obj=listing, obj_in=listing_update)
    logger.info(f"Publicación {listing_id} actualizada por {current_user.id}")
    return updated_listing


@router.delete("/{listing_id}", response_model=MessageResponse)
def delete_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Eliminar publicación (soft delete).

    Requiere autenticación.
    Solo el vendedor puede eliminar su publicación.

    La publicación no se elimina físicamente, se marca is_active = False.
    Eliminar una publicación ya inactiva también retorna éxito.
    """
    listing = ensure_listing_owner(
        crud_listing.get(db, listing_id),
        current_user.id,
        "No tienes permiso para eliminar esta publicación"
    )

    crud_listing.soft_delete(db, db_obj=listing)
    logger.info(f"Publicación {listing_id} eliminada (soft) por {current_user.id}")

    return MessageResponse(message="Publicación eliminada exitosamente")
