"""
Schemas comunes reutilizables.
"""
from pydantic import BaseModel
from typing import Any, List, Optional


class MessageResponse(BaseModel):
    """Schema de respuesta con mensaje simple."""

    message: str
    success: bool = True

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """Schema de respuesta de error."""

    detail: str

    model_config = {"from_attributes": True}


class FieldError(BaseModel):
    """Error de validación de un campo (ruta + mensaje)."""

    type: Optional[str] = None
    loc: List[Any]
    msg: str


class ValidationErrorResponse(BaseModel):
    """Schema de respuesta para errores de validación (400)."""

    detail: str
    errors: List[FieldError]
