"""
Router principal de la API v1.
Incluye todos los endpoints de la aplicación.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    users,
    listings,
    offers,
    conversations,
    messages,
)

api_router = APIRouter()

# ============================================================================
# USUARIOS
# ============================================================================
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Usuarios"]
)

# ============================================================================
# PUBLICACIONES
# ============================================================================
api_router.include_router(
    listings.router,
    prefix="/listings",
    tags=["Publicaciones"]
)

# ============================================================================
# OFERTAS
# ============================================================================
api_router.include_router(
    offers.router,
    prefix="",  # Ya tiene el prefijo completo en las rutas
    tags=["Ofertas"]
)

# ============================================================================
# CHAT
# ============================================================================
api_router.include_router(
    conversations.router,
    prefix="/conversations",
    tags=["Chat"]
)

api_router.include_router(
    messages.router,
    prefix="",  # Ya tiene el prefijo completo en las rutas
    tags=["Chat"]
)
