"""
Dependencias comunes de FastAPI.
"""
from typing import Any, Dict, Generator, Optional
from fastapi import Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError
from sqlalchemy.orm import Session
from jose import JWTError

from app.db.session import SessionLocal
from app.core.security import decode_token, profile_from_claims
from app.core.exceptions import UnauthorizedException
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.listing import ListingFilters
from app.schemas.user import UserUpsert

security = HTTPBearer(auto_error=False)


def get_db() -> Generator:
    """
    Dependencia que proporciona una sesión de base de datos.

    Yields:
        Session: Sesión de SQLAlchemy
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Dict[str, Any]:
    """
    Obtener los claims del token emitido por el proveedor de identidad.

    Args:
        credentials: Credenciales HTTP Bearer

    Returns:
        Payload del token

    Raises:
        UnauthorizedException: Si falta el token o es inválido
    """
    if credentials is None:
        raise UnauthorizedException("No autenticado")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedException("No se pudieron validar las credenciales")

    if payload.get("sub") is None or payload.get("type") != "access":
        raise UnauthorizedException("No se pudieron validar las credenciales")

    return payload


def get_current_user(
    db: Session = Depends(get_db),
    claims: Dict[str, Any] = Depends(get_token_claims)
) -> User:
    """
    Obtener el usuario actual, sincronizando su perfil con el token.

    Cada solicitud autenticada hace upsert del usuario con los claims de
    perfil, igual que lo haría el callback de login del proveedor.

    Args:
        db: Sesión de base de datos
        claims: Payload del token

    Returns:
        Usuario actual

    Raises:
        UnauthorizedException: Si el perfil del token es inválido
    """
    try:
        profile = UserUpsert(**profile_from_claims(claims))
    except ValidationError:
        raise UnauthorizedException("Perfil de usuario inválido en el token")

    return crud_user.upsert(db, obj_in=profile)


def get_listing_filters(
    request: Request,
    category: Optional[str] = Query(None, description="Categoría exacta"),
    price_min: Optional[str] = Query(None, alias="priceMin", description="Precio mínimo (inclusivo)"),
    price_max: Optional[str] = Query(None, alias="priceMax", description="Precio máximo (inclusivo)"),
    condition: Optional[str] = Query(None, description="Estado exacto del artículo"),
    search: Optional[str] = Query(None, description="Texto en título o descripción"),
    seller_id: Optional[str] = Query(None, alias="sellerId", description="ID del vendedor"),
) -> ListingFilters:
    """
    Construir los filtros de búsqueda desde el query string.

    Los seis filtros se declaran para la documentación OpenAPI; la
    validación la hace ListingFilters, que también acepta los nombres
    snake_case. Claves desconocidas o valores inválidos producen un 400.

    Args:
        request: Request de FastAPI
        category, price_min, price_max, condition, search, seller_id: Filtros

    Returns:
        Filtros validados
    """
    declared = {
        "category": category,
        "priceMin": price_min,
        "priceMax": price_max,
        "condition": condition,
        "search": search,
        "sellerId": seller_id,
    }
    supplied = {key: value for key, value in declared.items() if value is not None}
    # El resto de claves (snake_case o desconocidas) las juzga el schema
    supplied.update(
        (key, value) for key, value in request.query_params.items() if key not in declared
    )

    try:
        return ListingFilters.model_validate(supplied)
    except ValidationError as e:
        errors = [
            {**error, "loc": ("query", *error.get("loc", ()))}
            for error in e.errors()
        ]
        raise RequestValidationError(errors)
