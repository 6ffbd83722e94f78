"""
Endpoints de la API v1.
"""
from app.api.v1.endpoints import (
    users,
    listings,
    offers,
    conversations,
    messages,
)

__all__ = [
    "users",
    "listings",
    "offers",
    "conversations",
    "messages",
]
