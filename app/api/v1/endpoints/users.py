"""
Endpoints de usuarios.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_user
from app.core.permissions import require_found
from app.crud.listing import listing as crud_listing
from app.crud.user import user as crud_user
from app.schemas.user import UserResponse, UserPublicProfile
from app.models.user import User

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Obtener perfil del usuario autenticado.

    El perfil se sincroniza con los claims del token en cada solicitud.
    """
    return current_user


@router.get("/{user_id}", response_model=UserPublicProfile)
def get_user_public_profile(
    user_id: str,
    db: Session = Depends(get_db)
):
    """
    Obtener perfil público de un usuario (sin email).

    No requiere autenticación.
    """
    user = require_found(crud_user.get(db, user_id), "Usuario no encontrado")

    profile = UserPublicProfile.model_validate(user)
    profile.active_listings = crud_listing.count_active_by_seller(db, seller_id=user.id)
    return profile
