"""
Script para poblar la base de datos de Libroteca con libros obtenidos de la API de Google Books.

Este módulo realiza búsquedas temáticas en Google Books y almacena los resultados
en el catálogo, evitando duplicados por título/autor o ISBN. Está pensado
para poblar entornos de desarrollo o pruebas con libros realistas y variados.

Uso:
    Ejecutar directamente este script para poblar la base de datos con libros.
    Requiere GOOGLE_BOOKS_API_KEY en el entorno o en `.env`.

Nota:
    - Solo añade libros si no existen previamente por título/autor o ISBN.
    - Las estadísticas (valoración media, número de reseñas) empiezan en 0.
"""

import logging
import asyncio
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from libroteca.db.session import SessionLocal, init_db
from libroteca.models.book import Book
from libroteca.crud import create_book, get_book_by_isbn
from libroteca.schemas.book import BookCreate
from libroteca.clients.google_books import search_books_google_api, parse_volume
from libroteca.core.exceptions import StoreError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

SEARCH_QUERIES: List[str] = [
    "subject:fantasy",
    "subject:science fiction",
    "subject:mystery",
    "subject:romance",
    "subject:historical fiction",
    "subject:biography",
    "subject:self-help",
    "classic literature",
    "literary fiction",
    "young adult novels",
]
MAX_RESULTS_PER_QUERY: int = 20

def populate_books(db: Session) -> int:
    """
    Busca libros usando la API de Google Books y los añade al catálogo.

    Args:
        db (Session): Sesión SQLAlchemy activa.

    Returns:
        int: Número de libros añadidos.
    """
    logger.info("--- Iniciando Población de Libros --- ")
    total_books_added: int = 0

    for query in SEARCH_QUERIES:
        logger.info(f"Buscando libros para: '{query}'...")
        google_books_data: Optional[List[Dict[str, Any]]] = asyncio.run(
            search_books_google_api(query, max_results=MAX_RESULTS_PER_QUERY)
        )

        if google_books_data is None:
            logger.error(f"Error al buscar libros para '{query}'. Ver logs anteriores.")
            continue
        if not google_books_data:
            logger.warning(f"No se encontraron resultados para '{query}'.")
            continue

        logger.info(f"Se encontraron {len(google_books_data)} resultados para '{query}'. Procesando...")

        for item in google_books_data:
            fields = parse_volume(item)
            if fields is None:
                logger.warning("Volumen sin título o autor encontrado, saltando.")
                continue

            exists = db.query(Book).filter(Book.title == fields["title"], Book.author == fields["author"]).first()
            if exists:
                logger.info(f"Libro ya existe (título/autor): '{fields['title']}'. Saltando.")
                continue
            if fields["isbn"] and get_book_by_isbn(db, fields["isbn"]):
                logger.info(f"Libro ya existe (ISBN): '{fields['title']}' [{fields['isbn']}]. Saltando.")
                continue

            try:
                new_book = create_book(db, BookCreate(**fields))
            except ValidationError as e:
                logger.warning(f"Datos no válidos para '{fields['title']}': {e.error_count()} errores. Saltando.")
                continue
            except StoreError:
                continue
            total_books_added += 1
            logger.info(f"  Añadido: '{new_book.title}' (ISBN: {new_book.isbn or 'N/A'})")

    logger.info(f"--- Población de Libros Finalizada: {total_books_added} libros añadidos en total. ---")
    return total_books_added

if __name__ == "__main__":
    init_db()
    db_session: Optional[Session] = None
    try:
        logger.info("Abriendo sesión de base de datos para poblar...")
        db_session = SessionLocal()
        populate_books(db_session)
    finally:
        if db_session:
            logger.info("Cerrando sesión de base de datos.")
            db_session.close()
