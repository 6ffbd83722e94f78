"""
Utilidades de seguridad: tokens JWT del proveedor de identidad.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from app.config import settings

# Claims de perfil que el proveedor de identidad puede incluir en el token
PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Crear un JWT access token.

    Lo usan el entorno de desarrollo y las pruebas; en producción el token
    lo emite el proveedor de identidad con la misma clave y algoritmo.

    Args:
        data: Datos a codificar en el token (al menos "sub")
        expires_delta: Tiempo de expiración personalizado

    Returns:
        Token JWT codificado
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decodificar y validar un JWT.

    Args:
        token: Token JWT a decodificar

    Returns:
        Payload del token decodificado

    Raises:
        JWTError: Si el token es inválido o ha expirado
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError as e:
        raise JWTError(f"Token inválido: {str(e)}")


def profile_from_claims(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extraer el perfil de usuario de los claims del token.

    Args:
        payload: Payload decodificado

    Returns:
        Dict con id y los campos de perfil presentes
    """
    profile = {"id": payload.get("sub")}
    for claim in PROFILE_CLAIMS:
        if payload.get(claim) is not None:
            profile[claim] = payload[claim]
    return profile
