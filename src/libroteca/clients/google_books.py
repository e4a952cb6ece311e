"""
Cliente asíncrono para interactuar con la API de Google Books.
Permite buscar libros externos usando la API pública de Google Books para
poblar el catálogo local de Libroteca, y traducir cada volumen a los campos
del modelo Book.
"""

import httpx
from libroteca.core.config import settings
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_API_URL = "https://www.googleapis.com/books/v1/volumes"

async def search_books_google_api(
    query: str,
    max_results: int = 10,
    client: Optional[httpx.AsyncClient] = None
) -> Optional[List[Any]]:
    """
    Busca libros usando la API de Google Books.

    Args:
        query (str): Término de búsqueda (palabras clave, título, autor, etc.).
        max_results (int, opcional): Número máximo de resultados a devolver (por defecto 10).
        client (Optional[httpx.AsyncClient]): Cliente a reutilizar. Si no se pasa, se crea uno.

    Returns:
        Optional[List[Any]]: Lista de volúmenes (cada uno como dict) si la búsqueda fue exitosa, None si hubo error.
    """
    if settings.GOOGLE_BOOKS_API_KEY == "NO_GOOGLE_KEY_SET":
        logger.error("Google Books API Key no está configurada.")
        return None

    params = {
        "q": query,
        "key": settings.GOOGLE_BOOKS_API_KEY,
        "maxResults": max_results,
        "printType": "books"
    }
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(GOOGLE_BOOKS_API_URL, params=params)
        else:
            response = await client.get(GOOGLE_BOOKS_API_URL, params=params)
        response.raise_for_status()
        data = response.json()
        logger.info(
            f"Búsqueda en Google Books para '{query}' exitosa. "
            f"{len(data.get('items', []))} resultados obtenidos."
        )
        return data.get("items", [])
    except httpx.RequestError as exc:
        logger.error(f"Error en la petición a Google Books API: {exc}")
        return None
    except httpx.HTTPStatusError as exc:
        logger.error(f"Error HTTP en Google Books API: {exc.response.status_code} - {exc.response.text}")
        return None
    except ValueError as exc:
        logger.error(f"Respuesta no válida de Google Books API: {exc}")
        return None

def _parse_year(published_date: Optional[str]) -> Optional[int]:
    # publishedDate puede ser "2019", "2019-05" o "2019-05-21"
    if not published_date:
        return None
    try:
        return int(published_date[:4])
    except ValueError:
        return None

def parse_volume(item: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Traduce un volumen de Google Books a los campos del modelo Book.

    Args:
        item (Dict[str, Any]): Volumen tal como lo devuelve la API.

    Returns:
        Optional[Dict[str, Any]]: Campos del libro, o None si el volumen no
        tiene título o autor.
    """
    volume_info: Dict[str, Any] = item.get('volumeInfo', {})

    title: Optional[str] = volume_info.get('title')
    authors: List[str] = volume_info.get('authors', [])
    if not title or not authors:
        return None

    categories: List[str] = volume_info.get('categories') or [None]
    genre: Optional[str] = categories[0]
    image_links: Dict[str, Any] = volume_info.get('imageLinks', {})
    cover_url: Optional[str] = image_links.get('thumbnail') or image_links.get('smallThumbnail')
    page_count = volume_info.get('pageCount')

    isbn_13: Optional[str] = None
    isbn_10: Optional[str] = None
    for identifier in volume_info.get('industryIdentifiers', []):
        id_type = identifier.get('type')
        id_value = identifier.get('identifier')
        if id_type == 'ISBN_13':
            isbn_13 = id_value
        elif id_type == 'ISBN_10':
            isbn_10 = id_value
    book_isbn: Optional[str] = isbn_13 or isbn_10

    return {
        "title": title[:255],
        "author": ", ".join(authors)[:255],
        "description": volume_info.get('description'),
        "genre": genre[:100] if genre else None,
        "published_year": _parse_year(volume_info.get('publishedDate')),
        "pages": page_count if isinstance(page_count, int) and page_count > 0 else None,
        "cover_image_url": cover_url[:512] if cover_url else None,
        "isbn": book_isbn[:13] if book_isbn else None,
    }
