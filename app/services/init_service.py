"""
Servicio de inicialización de la aplicación.
Verifica la base de datos y, en desarrollo, crea el esquema al arrancar.
"""
import logging
import time
from sqlalchemy import text
from app.config import get_settings
from app.db.session import SessionLocal, engine
from app.models import Base

logger = logging.getLogger(__name__)


def wait_for_db(max_retries: int = 10, delay: int = 2) -> bool:
    """
    Esperar a que la base de datos esté lista.

    Args:
        max_retries: Número máximo de reintentos
        delay: Segundos entre reintentos

    Returns:
        True si la BD está lista, False si falló
    """
    for attempt in range(max_retries):
        try:
            db = SessionLocal()
            try:
                db.execute(text("SELECT 1"))
            finally:
                db.close()
            return True
        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(f"Esperando base de datos... intento {attempt + 1}/{max_retries}")
                time.sleep(delay)
            else:
                logger.error(f"Base de datos no disponible después de {max_retries} intentos: {e}")
                return False
    return False


def init_schema() -> bool:
    """
    Crear las tablas si AUTO_CREATE_TABLES está activo.

    Returns:
        True si se ejecutó create_all, False en caso contrario
    """
    settings = get_settings()

    if not settings.AUTO_CREATE_TABLES:
        return False

    Base.metadata.create_all(bind=engine)
    logger.info("Esquema de base de datos creado/verificado")
    return True


def run_initialization():
    """
    Ejecutar todas las tareas de inicialización.
    Llamar desde el evento startup de FastAPI.
    """
    logger.info("Ejecutando inicialización...")

    if wait_for_db():
        init_schema()

    logger.info("Inicialización completada")
