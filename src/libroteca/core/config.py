"""
Módulo de configuración para Libroteca.

Define la clase Settings, que carga variables de entorno y expone la
configuración de toda la aplicación: URL de base de datos, claves de API,
entorno, nivel de logging, orígenes CORS y parámetros de paginación.

Uso:
    Importar el objeto `settings` para acceder a la configuración en todo el proyecto.
"""

import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List

load_dotenv()

class Settings(BaseSettings):
    """
    Configuración de la aplicación cargada desde variables de entorno.

    Atributos:
        DATABASE_URL (str): Cadena de conexión a la base de datos.
        GOOGLE_BOOKS_API_KEY (str): Clave de la API de Google Books (solo scripts de carga).
        ENVIRONMENT (str): Entorno actual (por ejemplo, 'production', 'development').
        LOG_LEVEL (str): Nivel de logging para los puntos de entrada.
        CORS_ORIGINS (str): Lista de orígenes permitidos separada por comas.
        USER_ID_HEADER (str): Cabecera con la identidad que inyecta la capa de autenticación.
        DEFAULT_PAGE_SIZE (int): Tamaño de página por defecto del catálogo.
        MAX_PAGE_SIZE (int): Tamaño de página máximo aceptado por la API.
        MAX_PAGE (int): Número de página máximo aceptado por la API.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./libroteca.db")
    GOOGLE_BOOKS_API_KEY: str = os.getenv("GOOGLE_BOOKS_API_KEY", "NO_GOOGLE_KEY_SET")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USER_ID_HEADER: str = os.getenv("USER_ID_HEADER", "X-User-Id")
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100
    MAX_PAGE: int = 100000

    @property
    def list_cors_origins(self) -> List[str]:
        """
        Devuelve la lista de orígenes CORS a partir de CORS_ORIGINS.

        Returns:
            List[str]: Orígenes permitidos.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
