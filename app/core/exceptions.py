"""
Excepciones personalizadas del marketplace.
"""

# Único detalle que recibe el cliente ante una falla de persistencia
STORE_ERROR_MESSAGE = "Error interno del servidor"


class MarketplaceException(Exception):
    """Excepción base para todas las excepciones del marketplace."""

    def __init__(self, message: str = "Error en la aplicación"):
        self.message = message
        super().__init__(self.message)


class NotFoundException(MarketplaceException):
    """Excepción cuando un recurso no se encuentra."""

    def __init__(self, message: str = "Recurso no encontrado"):
        super().__init__(message)


class UnauthorizedException(MarketplaceException):
    """Excepción cuando el usuario no está autenticado."""

    def __init__(self, message: str = "No autorizado"):
        super().__init__(message)


class ForbiddenException(MarketplaceException):
    """Excepción cuando el usuario no tiene permisos."""

    def __init__(self, message: str = "Acceso prohibido"):
        super().__init__(message)


class BadRequestException(MarketplaceException):
    """Excepción cuando la solicitud es inválida."""

    def __init__(self, message: str = "Solicitud inválida"):
        super().__init__(message)


class ConflictException(MarketplaceException):
    """Excepción cuando hay un conflicto con el estado actual."""

    def __init__(self, message: str = "Conflicto con el recurso"):
        super().__init__(message)

