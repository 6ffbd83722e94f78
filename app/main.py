"""
Aplicación FastAPI principal del marketplace.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.api.v1.router import api_router
from app.services.init_service import run_initialization
from app.core.exceptions import (
    NotFoundException,
    UnauthorizedException,
    ForbiddenException,
    BadRequestException,
    ConflictException,
    STORE_ERROR_MESSAGE,
)
from app.schemas.common import ErrorResponse, FieldError, ValidationErrorResponse

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Crear aplicación FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Marketplace API

    API RESTful para compra y venta de artículos entre usuarios.

    ### Características principales:

    * 🔐 **Autenticación** - Tokens del proveedor de identidad (Bearer JWT)
    * 📦 **Publicaciones** - Crear, editar, eliminar (soft) y buscar con filtros
    * 💬 **Chat** - Conversaciones por publicación entre comprador y vendedor
    * 💰 **Ofertas** - Ofertas de compra que el vendedor acepta o rechaza

    ### Documentación:

    - **Swagger UI**: /docs
    - **ReDoc**: /redoc
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception Handlers
@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    """Handler para recursos no encontrados."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    """Handler para errores de autenticación."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    """Handler para errores de autorización."""
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc)}
    )


@app.exception_handler(BadRequestException)
async def bad_request_exception_handler(request: Request, exc: BadRequestException):
    """Handler para solicitudes inválidas."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)}
    )


@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    """Handler para conflictos."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc)}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler para errores de validación de Pydantic (400 con lista de errores)."""
    body = ValidationErrorResponse(
        detail="Datos inválidos",
        errors=[
            FieldError(type=error.get("type"), loc=list(error.get("loc", ())), msg=error.get("msg", ""))
            for error in exc.errors()
        ],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump()
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    """Handler para fallas de persistencia: se registra y no se expone el detalle."""
    logger.exception(f"Error de base de datos en {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(detail=STORE_ERROR_MESSAGE).model_dump()
    )


# Incluir routers de la API
app.include_router(api_router, prefix="/api/v1")


# Endpoint raíz
@app.get("/", tags=["Health"])
async def root():
    """
    Endpoint raíz para verificar que la API está funcionando.
    """
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "online",
        "docs": "/docs",
        "redoc": "/redoc"
    }


# Health check
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Endpoint de health check para monitoreo.
    """
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


# Startup event
@app.on_event("startup")
async def startup_event():
    """
    Evento ejecutado al iniciar la aplicación.
    """
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} iniciada")
    logger.info(f"Modo debug: {settings.DEBUG}")

    try:
        run_initialization()
    except Exception:
        logger.exception("Error en inicialización")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """
    Evento ejecutado al apagar la aplicación.
    """
    logger.info(f"{settings.APP_NAME} detenida")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
