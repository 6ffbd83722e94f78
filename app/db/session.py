"""
Engine y fábrica de sesiones SQLAlchemy (una sola instancia por proceso).
"""
from typing import Any, Dict, Optional
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker
from app.config import Settings, get_settings


def engine_options(settings: Settings) -> Dict[str, Any]:
    """
    Opciones de create_engine según el motor configurado.

    SQLite (desarrollo y pruebas) no admite pool por tamaño y necesita
    compartir la conexión entre hilos del servidor; PostgreSQL usa pool.

    Args:
        settings: Configuración de la aplicación

    Returns:
        Argumentos para create_engine
    """
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.DEBUG,   # Log SQL en modo debug
    }
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_recycle=3600, pool_size=5, max_overflow=10)
    return options


class DatabaseConnection:
    """
    Singleton con el engine y el sessionmaker de la aplicación.
    Todas las solicitudes comparten el mismo pool de conexiones.
    """
    _instance: Optional['DatabaseConnection'] = None
    _engine: Optional[Engine] = None
    _session_factory: Optional[sessionmaker] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._engine is None:
            settings = get_settings()
            self._engine = create_engine(settings.DATABASE_URL, **engine_options(settings))
            # autoflush desactivado: cada operación decide cuándo escribir
            self._session_factory = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self._engine
            )

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        return self._session_factory


_db = DatabaseConnection()

engine = _db.engine
SessionLocal = _db.session_factory
