"""
Operaciones CRUD para el modelo Book en la base de datos.
Incluye el listado paginado y filtrado del catálogo, los libros destacados,
la búsqueda libre para las herramientas de carga y la obtención por ID o ISBN.
"""

import logging
from sqlalchemy.orm import Session
from sqlalchemy import select, or_, func, desc, asc
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple

from ..models.book import Book
from ..schemas.book import BookCreate
from ..core.exceptions import StoreError
from .book_filters import BookFilter, build_book_conditions, build_book_ordering

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
FEATURED_LIMIT = 4

def list_books(
    db: Session,
    filters: Optional[BookFilter] = None,
    sort_by: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE
) -> Tuple[List[Book], int]:
    """
    Devuelve una página del catálogo y el total de libros que cumplen el filtro.

    La página y el total son dos consultas independientes con las mismas condiciones.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        filters (Optional[BookFilter]): Filtro ya interpretado. None equivale a sin filtro.
        sort_by (Optional[str]): popular (por defecto), rating, recent o title.
        page (int): Página, empezando en 1.
        page_size (int): Número de libros por página.

    Returns:
        Tuple[List[Book], int]: Libros de la página y total sin paginar.
    """
    conditions = build_book_conditions(filters or BookFilter())
    page = max(page, 1)
    page_size = max(page_size, 1)

    stmt = select(Book)
    count_stmt = select(func.count()).select_from(Book)
    if conditions:
        stmt = stmt.where(*conditions)
        count_stmt = count_stmt.where(*conditions)

    stmt = stmt.order_by(*build_book_ordering(sort_by))\
               .limit(page_size)\
               .offset((page - 1) * page_size)
    items = db.execute(stmt).scalars().all()

    total = db.execute(count_stmt).scalar_one()

    return items, total

def get_featured_books(db: Session, limit: int = FEATURED_LIMIT) -> List[Book]:
    """
    Libros mejor valorados, desempatando por número de reseñas.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        limit (int): Número de libros a devolver.

    Returns:
        List[Book]: Libros destacados.
    """
    stmt = select(Book)\
        .order_by(desc(Book.average_rating), desc(Book.review_count), asc(Book.id))\
        .limit(limit)
    return db.execute(stmt).scalars().all()

def search_books(
    db: Session,
    query: Optional[str] = None,
    limit: int = 10
) -> List[Book]:
    """
    Busca libros por un término general en título, autor o género.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        query (Optional[str]): Término de búsqueda (coincidencia parcial, sin distinción de mayúsculas).
        limit (int): Número máximo de resultados a devolver.

    Returns:
        List[Book]: Lista de objetos Book que cumplen los criterios.
    """
    stmt = select(Book)

    if query:
        stmt = stmt.where(or_(
            Book.title.icontains(query, autoescape=True),
            Book.author.icontains(query, autoescape=True),
            Book.genre.icontains(query, autoescape=True)
        ))

    stmt = stmt.order_by(asc(Book.id)).limit(limit)
    return db.execute(stmt).scalars().all()

def get_book_by_id(db: Session, book_id: int) -> Optional[Book]:
    """
    Recupera un libro por su ID primario.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        book_id (int): ID del libro a recuperar.

    Returns:
        Optional[Book]: El objeto Book si se encuentra, None si no existe.
    """
    return db.get(Book, book_id)

def get_book_by_isbn(db: Session, isbn: str) -> Optional[Book]:
    """
    Recupera un libro por su ISBN.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        isbn (str): ISBN del libro a recuperar.

    Returns:
        Optional[Book]: El objeto Book si se encuentra, None si no existe.
    """
    stmt = select(Book).where(Book.isbn == isbn)
    result = db.execute(stmt)
    return result.scalars().first()

def create_book(db: Session, book: BookCreate) -> Book:
    """
    Da de alta un libro. Las estadísticas derivadas empiezan en 0.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        book (BookCreate): Datos validados del libro.

    Returns:
        Book: El libro creado.

    Raises:
        StoreError: Si falla la escritura en la base de datos.
    """
    db_book = Book(**book.model_dump())
    db.add(db_book)
    try:
        db.commit()
        db.refresh(db_book)
    except SQLAlchemyError as e:
        logger.exception(f"Error creating book '{book.title}': {e}")
        db.rollback()
        raise StoreError("Failed to create book") from e
    logger.info(f"Book {db_book.id} created: '{db_book.title}'")
    return db_book
