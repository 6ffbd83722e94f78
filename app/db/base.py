"""
Base declarativa de SQLAlchemy con soporte para Soft Delete.
Todos los modelos heredan de esta clase base.
"""
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column
from sqlalchemy.orm import declarative_base


def utcnow() -> datetime:
    """Instante actual en UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


class SoftDeleteMixin:
    """
    Mixin que agrega soporte para soft delete a los modelos.

    El borrado suave se representa con la bandera is_active:
    - Campo is_active (True por defecto, False = eliminado)
    - Método soft_delete() para eliminar suavemente
    - Propiedad is_deleted para verificar estado

    El registro nunca se elimina físicamente.
    """

    is_active = Column(Boolean, nullable=False, default=True, index=True)

    def soft_delete(self) -> None:
        """Marca el registro como eliminado (soft delete). Idempotente."""
        self.is_active = False

    @property
    def is_deleted(self) -> bool:
        """Verifica si el registro está eliminado."""
        return not self.is_active


# Base declarativa de SQLAlchemy
Base = declarative_base()
