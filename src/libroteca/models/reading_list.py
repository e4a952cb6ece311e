"""
Modelo ORM para las entradas de la lista de lectura de un usuario.
Cada par (usuario, libro) aparece como máximo una vez.
"""

from sqlalchemy import (Column, Integer, String, ForeignKey, DateTime, func,
                        CheckConstraint, UniqueConstraint)
from sqlalchemy.orm import relationship
from libroteca.db.session import Base

WANT_TO_READ = "want_to_read"
READING = "reading"
READ = "read"
READING_STATUSES = (WANT_TO_READ, READING, READ)

class ReadingListEntry(Base):
    """
    Estado de un libro en la lista de lectura de un usuario.

    Atributos:
        id (int): Identificador primario.
        user_id (str): Usuario propietario de la entrada.
        book_id (int): Libro de la entrada.
        status (str): Uno de want_to_read, reading o read.
        user_rating (int): Valoración personal opcional (1-5).
        date_read (datetime): Fecha en la que se terminó el libro.
        created_at (datetime): Fecha de alta en la lista.
        updated_at (datetime): Última modificación (incluye los upserts).
    """
    __tablename__ = "reading_lists"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=WANT_TO_READ, server_default=WANT_TO_READ)
    user_rating = Column(Integer, nullable=True)
    date_read = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="reading_list")
    book = relationship("Book", back_populates="reading_list_entries")

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uq_reading_list_user_book'),
        CheckConstraint(
            "status IN ('want_to_read', 'reading', 'read')",
            name='reading_list_status_check'
        ),
        CheckConstraint(
            'user_rating IS NULL OR (user_rating >= 1 AND user_rating <= 5)',
            name='reading_list_user_rating_check'
        ),
    )

    def __repr__(self) -> str:
        return f"<ReadingListEntry(user_id='{self.user_id}', book_id={self.book_id}, status='{self.status}')>"
