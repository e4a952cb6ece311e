"""
Modelo ORM para la entidad Book en la base de datos de Libroteca.
Define los campos principales de un libro, sus estadísticas derivadas y su
relación con las reseñas y las listas de lectura.
"""

from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, func
from sqlalchemy.orm import relationship
from libroteca.db.session import Base

class Book(Base):
    """
    Representa un libro del catálogo.

    Atributos:
        id (int): Identificador primario del libro.
        title (str): Título del libro.
        author (str): Autor del libro.
        description (str): Descripción o sinopsis del libro.
        genre (str): Género literario.
        published_year (int): Año de publicación.
        pages (int): Número de páginas.
        cover_image_url (str): URL de la imagen de portada.
        isbn (str): ISBN del libro (hasta 13 caracteres).
        average_rating (Decimal): Valoración media de las reseñas, con dos decimales.
        review_count (int): Número de reseñas.
        created_at (datetime): Fecha de alta en el catálogo.
        reviews (List[Review]): Lista de reseñas asociadas al libro.

    `average_rating` y `review_count` son derivados: solo los escribe
    `crud_review.recompute_book_stats`.
    """
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), index=True, nullable=False)
    author = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=True)
    genre = Column(String(100), index=True, nullable=True)
    published_year = Column(Integer, index=True, nullable=True)
    pages = Column(Integer, nullable=True)
    cover_image_url = Column(String(512), nullable=True)
    isbn = Column(String(13), index=True, nullable=True)
    average_rating = Column(Numeric(3, 2), nullable=False, default=Decimal("0"), server_default="0")
    review_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    reviews = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan"
    )
    reading_list_entries = relationship(
        "ReadingListEntry",
        back_populates="book",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """
        Representación legible del objeto Book para depuración.

        Returns:
            str: Cadena representando el libro.
        """
        return f"<Book(id={self.id}, title='{self.title[:30]}...', author='{self.author}')>"
