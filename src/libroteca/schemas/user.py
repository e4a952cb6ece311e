"""
Esquemas Pydantic para la entidad User en la API de Libroteca.
Define los modelos de entrada y salida para validación y serialización de usuarios.
"""

import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, ConfigDict, Field

class UserUpdate(BaseModel):
    """
    Campos de perfil editables por el propio usuario. Todos opcionales;
    solo se escriben los que se envían.

    Atributos:
        email (Optional[EmailStr]): Correo electrónico.
        first_name (Optional[str]): Nombre.
        last_name (Optional[str]): Apellidos.
        profile_image_url (Optional[str]): URL del avatar.
        bio (Optional[str]): Biografía.
        location (Optional[str]): Ubicación.
    """
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    profile_image_url: Optional[str] = Field(default=None, max_length=512)
    bio: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)

    model_config = ConfigDict(extra="forbid")

class UserUpsert(UserUpdate):
    """
    Identidad completa que sincroniza la capa de autenticación.

    Atributos:
        id (str): Identificador del usuario en el proveedor de autenticación.
    """
    id: str = Field(..., min_length=1, max_length=255)

class UserSchema(BaseModel):
    """
    Esquema de salida para un usuario.
    """
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserStats(BaseModel):
    """
    Contadores del perfil de un usuario.

    Atributos:
        books_read (int): Entradas de la lista de lectura con estado 'read'.
        reviews_written (int): Reseñas escritas.
        to_read_list (int): Entradas con estado 'want_to_read'.
        followers (Optional[int]): No hay grafo de seguidores; siempre None.
    """
    books_read: int
    reviews_written: int
    to_read_list: int
    followers: Optional[int] = None
