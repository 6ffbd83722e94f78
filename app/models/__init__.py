"""
Módulo de modelos ORM.
Importa todos los modelos para que SQLAlchemy los reconozca.
"""
from app.db.base import Base

# Usuarios
from app.models.user import User

# Publicaciones
from app.models.listing import Listing

# Chat
from app.models.conversation import Conversation
from app.models.message import Message

# Ofertas
from app.models.offer import Offer

__all__ = [
    "Base",
    # Usuarios
    "User",
    # Publicaciones
    "Listing",
    # Chat
    "Conversation",
    "Message",
    # Ofertas
    "Offer",
]
