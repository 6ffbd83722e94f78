"""
CRUD para publicaciones con soporte para Soft Delete y filtros de búsqueda.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc, or_
from sqlalchemy.sql.elements import ColumnElement
from app.crud.base import CRUDBase
from app.db.base import utcnow
from app.models.listing import Listing
from app.schemas.listing import ListingCreate, ListingUpdate, ListingFilters

# Límite fijo de publicaciones destacadas en la portada
FEATURED_LISTINGS_LIMIT = 4


def _escape_like(value: str) -> str:
    """Escapar comodines de LIKE para búsqueda por subcadena literal."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_predicate(value: str) -> ColumnElement:
    pattern = f"%{_escape_like(value)}%"
    return or_(
        Listing.title.ilike(pattern, escape="\\"),
        Listing.description.ilike(pattern, escape="\\"),
    )


# Un predicado por cada filtro reconocido en ListingFilters
_FILTER_PREDICATES: Dict[str, Callable[[Any], ColumnElement]] = {
    "category": lambda value: Listing.category == value,
    "price_min": lambda value: Listing.price >= value,
    "price_max": lambda value: Listing.price <= value,
    "condition": lambda value: Listing.condition == value,
    "search": _search_predicate,
    "seller_id": lambda value: Listing.seller_id == value,
}


def build_listing_predicates(filters: Optional[ListingFilters] = None) -> Tuple[ColumnElement, ...]:
    """
    Construir la tupla de predicados para buscar publicaciones.

    Siempre incluye is_active = true. Cada filtro presente agrega un
    predicado; los ausentes no restringen. La tupla se combina con AND.

    Args:
        filters: Filtros de búsqueda (opcional)

    Returns:
        Tupla inmutable de expresiones SQLAlchemy
    """
    supplied = filters.model_dump(exclude_none=True) if filters is not None else {}
    return (Listing.is_active.is_(True),) + tuple(
        _FILTER_PREDICATES[name](value) for name, value in supplied.items()
    )


class CRUDListing(CRUDBase[Listing, ListingCreate, ListingUpdate]):
    """CRUD específico para publicaciones con soporte para soft delete."""

    def create(self, db: Session, *, obj_in: ListingCreate, seller_id: str) -> Listing:
        """
        Crear publicación asignando el vendedor.

        Args:
            db: Sesión de base de datos
            obj_in: Datos de la publicación
            seller_id: ID del usuario autenticado

        Returns:
            Publicación creada
        """
        return super().create(db, obj_in=obj_in, seller_id=seller_id)

    def get_listings(
        self, db: Session, *, filters: Optional[ListingFilters] = None
    ) -> List[Listing]:
        """
        Obtener publicaciones activas que cumplen todos los filtros.
        Incluye al vendedor y ordena de la más reciente a la más antigua.

        Args:
            db: Sesión de base de datos
            filters: Filtros de búsqueda (opcional)

        Returns:
            Lista completa de publicaciones (sin paginación)
        """
        return (
            db.query(Listing)
            .options(joinedload(Listing.seller))
            .filter(*build_listing_predicates(filters))
            .order_by(desc(Listing.created_at), desc(Listing.id))
            .all()
        )

    def get_with_seller(self, db: Session, *, id: int) -> Optional[Listing]:
        """
        Obtener una publicación con su vendedor, esté activa o no.

        Args:
            db: Sesión de base de datos
            id: ID de la publicación

        Returns:
            Publicación o None
        """
        return (
            db.query(Listing)
            .options(joinedload(Listing.seller))
            .filter(Listing.id == id)
            .first()
        )

    def get_featured(self, db: Session) -> List[Listing]:
        """
        Obtener publicaciones destacadas activas (máximo 4).

        Args:
            db: Sesión de base de datos

        Returns:
            Lista de publicaciones destacadas
        """
        return (
            db.query(Listing)
            .options(joinedload(Listing.seller))
            .filter(
                Listing.is_featured.is_(True),
                Listing.is_active.is_(True)
            )
            .order_by(desc(Listing.created_at), desc(Listing.id))
            .limit(FEATURED_LISTINGS_LIMIT)
            .all()
        )

    def count_active_by_seller(self, db: Session, *, seller_id: str) -> int:
        """Cantidad de publicaciones activas de un vendedor."""
        return db.query(Listing).filter(
            Listing.seller_id == seller_id,
            Listing.is_active.is_(True)
        ).count()

    def update(
        self, db: Session, *, db_obj: Listing, obj_in: ListingUpdate | Dict[str, Any]
    ) -> Listing:
        """
        Actualización parcial; siempre refresca updated_at.

        Args:
            db: Sesión de base de datos
            db_obj: Publicación a actualizar
            obj_in: Campos a modificar

        Returns:
            Publicación actualizada
        """
        db_obj.updated_at = utcnow()
        return super().update(db, db_obj=db_obj, obj_in=obj_in)

    def soft_delete(self, db: Session, *, db_obj: Listing) -> bool:
        """
        Eliminar publicación de forma suave (is_active = False).
        Repetir la operación sobre una publicación inactiva no falla.

        Args:
            db: Sesión de base de datos
            db_obj: Publicación a eliminar

        Returns:
            True si la publicación quedó inactiva
        """
        db_obj.soft_delete()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj.is_deleted


# Instancia global del CRUD
listing = CRUDListing(Listing)
