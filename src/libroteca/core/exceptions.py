"""
Errores de dominio de Libroteca.

Las funciones CRUD lanzan estas excepciones y la capa API las traduce a
códigos HTTP (400, 403, 404, 500).
"""

from typing import Dict, Optional


class LibrotecaError(Exception):
    """Base de todos los errores de la aplicación."""

    status_code: int = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(LibrotecaError):
    """Entrada mal formada. Incluye mensajes por campo."""

    status_code = 400

    def __init__(self, message: str = "Invalid data", errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(LibrotecaError):
    status_code = 404


class ForbiddenError(LibrotecaError):
    status_code = 403


class StoreError(LibrotecaError):
    """Fallo de acceso a datos. El mensaje original nunca se envía al cliente."""

    status_code = 500
