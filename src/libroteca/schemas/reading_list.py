"""
Esquemas Pydantic para la lista de lectura.
"""

import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .book import BookSchema

ReadingStatus = Literal["want_to_read", "reading", "read"]

class ReadingListCreate(BaseModel):
    """
    Alta (o actualización por upsert) de un libro en la lista de lectura.

    Atributos:
        book_id (int): Libro a añadir.
        status (ReadingStatus): Estado; por defecto want_to_read.
    """
    book_id: int
    status: ReadingStatus = "want_to_read"

    model_config = ConfigDict(extra="forbid")

class ReadingListUpdate(BaseModel):
    """
    Actualización parcial de una entrada. Solo se escriben los campos enviados.
    `status` puede omitirse pero no enviarse como null: la columna es obligatoria.
    """
    status: Optional[ReadingStatus] = None
    user_rating: Optional[int] = Field(default=None, ge=1, le=5)
    date_read: Optional[datetime.datetime] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("status")
    @classmethod
    def status_not_null(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            raise ValueError("status cannot be null")
        return value

class ReadingListEntrySchema(BaseModel):
    id: int
    user_id: str
    book_id: int
    status: ReadingStatus
    user_rating: Optional[int] = None
    date_read: Optional[datetime.datetime] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)

class ReadingListItemSchema(ReadingListEntrySchema):
    """Entrada de la lista con su libro embebido."""
    book: Optional[BookSchema] = None
