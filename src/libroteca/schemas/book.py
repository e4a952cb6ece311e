"""
Esquemas Pydantic para la entidad Book en la API de Libroteca.
Define los modelos de entrada y salida del catálogo, incluido el listado paginado.
"""

import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class BookBase(BaseModel):
    """
    Campos de un libro que puede enviar un cliente.

    Atributos:
        title (str): Título.
        author (str): Autor.
        description (Optional[str]): Sinopsis.
        genre (Optional[str]): Género.
        published_year (Optional[int]): Año de publicación.
        pages (Optional[int]): Número de páginas.
        cover_image_url (Optional[str]): URL de portada.
        isbn (Optional[str]): ISBN-10 o ISBN-13.
    """
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    genre: Optional[str] = Field(default=None, max_length=100)
    published_year: Optional[int] = Field(default=None, ge=0, le=9999)
    pages: Optional[int] = Field(default=None, ge=1)
    cover_image_url: Optional[str] = Field(default=None, max_length=512)
    isbn: Optional[str] = Field(default=None, max_length=13)

class BookCreate(BookBase):
    """
    Esquema de creación. `average_rating` y `review_count` son derivados y
    no se aceptan.
    """
    model_config = ConfigDict(extra="forbid")

class BookSchema(BookBase):
    """
    Esquema de salida de un libro, con sus estadísticas derivadas.
    """
    id: int
    average_rating: Decimal = Decimal("0")
    review_count: int = 0
    created_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)

class PaginatedBooks(BaseModel):
    """Página del catálogo junto con el total de coincidencias del filtro."""
    items: List[BookSchema]
    total: int
    page: int
    page_size: int
    total_pages: int
