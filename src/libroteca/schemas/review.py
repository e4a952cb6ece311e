"""
Esquemas Pydantic para la entidad Review en la API de Libroteca.
Define los modelos de entrada y salida para validación y serialización de reseñas.
"""

from pydantic import BaseModel, Field, ConfigDict
import datetime
from typing import Optional

from .user import UserSchema

class ReviewBase(BaseModel):
    """
    Esquema base para una reseña, usado como base para creación y visualización.

    Atributos:
        rating (int): Calificación entre 1 y 5.
        title (Optional[str]): Titular opcional de la reseña.
        content (Optional[str]): Texto opcional de la reseña.
    """
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None

class ReviewCreate(ReviewBase):
    """
    Esquema para la creación de una reseña.
    No requiere campos adicionales; user_id y book_id se gestionan aparte.
    """
    model_config = ConfigDict(extra="forbid")

class ReviewSchema(ReviewBase):
    """
    Esquema de salida para una reseña, incluyendo campos adicionales.

    Atributos:
        id (int): ID de la reseña.
        user_id (str): ID del usuario que hizo la reseña.
        book_id (int): ID del libro reseñado.
        created_at (datetime.datetime): Fecha de creación de la reseña.
        updated_at (datetime.datetime): Fecha de la última modificación.
    """
    id: int
    user_id: str
    book_id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)

class ReviewWithAuthorSchema(ReviewSchema):
    """
    Reseña tal como se lista en la ficha de un libro: con su autor y su
    número de "me gusta".
    """
    author: Optional[UserSchema] = None
    like_count: int = 0

class LikeResponse(BaseModel):
    """Respuesta de los endpoints de "me gusta"."""
    message: str
    review_id: int
    like_count: int
