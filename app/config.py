"""
Configuración de la API del marketplace.
Todo se lee de variables de entorno (o de un archivo .env).
"""
import logging
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Configuración de la aplicación usando Pydantic Settings v2."""

    # Base de datos (REQUERIDO). postgresql://... en producción, sqlite:// en pruebas
    DATABASE_URL: str

    # Verificación de los tokens que emite el proveedor de identidad (REQUERIDO)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    APP_NAME: str = "Marketplace API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Orígenes del cliente web, separados por coma
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Crear tablas al arrancar (solo desarrollo)
    AUTO_CREATE_TABLES: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL inválido: {value}")
        return level

    @property
    def allowed_origins_list(self) -> List[str]:
        """ALLOWED_ORIGINS como lista, sin entradas vacías."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


_settings_instance = None


def get_settings() -> Settings:
    """
    Obtener instancia Singleton de configuración.
    Se carga una sola vez y se reutiliza.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


settings = get_settings()
