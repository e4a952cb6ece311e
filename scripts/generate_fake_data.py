"""
Script para generación de datos falsos en la base de datos de Libroteca.

Este módulo crea usuarios, reseñas, "me gusta" y entradas de lista de lectura
de prueba utilizando Faker y las funciones CRUD del proyecto. Está pensado para
poblar entornos de desarrollo o pruebas con datos realistas y variados.

Uso:
    Ejecutar directamente este script después de `populate_db.py`.

Nota:
    - El script NO crea libros, solo utiliza los existentes.
    - Las reseñas se crean con `create_review`, así que la valoración media y
      el número de reseñas de cada libro quedan consistentes.
"""

import random
import logging
import uuid
from faker import Faker
from sqlalchemy.orm import Session
from typing import List, Optional

from libroteca.db.session import SessionLocal, init_db
from libroteca.models.book import Book
from libroteca.models.reading_list import READING_STATUSES
from libroteca.schemas.user import UserUpsert
from libroteca.schemas.review import ReviewCreate
from libroteca.crud import add_or_update, create_review, like_review, upsert_user
from libroteca.core.exceptions import LibrotecaError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

NUM_FAKE_USERS: int = 50
MAX_REVIEWS_PER_USER: int = 15
MIN_REVIEWS_PER_USER: int = 2
MAX_LIKES_PER_USER: int = 20
MAX_READING_LIST_PER_USER: int = 10

fake = Faker(['es_ES', 'en_US'])

def create_fake_users(db: Session) -> List[str]:
    """
    Crea NUM_FAKE_USERS usuarios con identificadores aleatorios.

    Returns:
        List[str]: IDs de los usuarios creados.
    """
    user_ids: List[str] = []
    for i in range(NUM_FAKE_USERS):
        user_in = UserUpsert(
            id=str(uuid.uuid4()),
            email=f"{uuid.uuid4().hex[:8]}.{fake.safe_email()}",
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            bio=fake.sentence(nb_words=12) if random.random() < 0.5 else None,
            location=fake.city() if random.random() < 0.6 else None,
        )
        try:
            new_user = upsert_user(db, user_in)
        except LibrotecaError as e:
            logger.warning(f"  ({i+1}/{NUM_FAKE_USERS}) No se pudo crear el usuario {user_in.email}: {e.message}")
            continue
        user_ids.append(new_user.id)
        logger.info(f"  ({i+1}/{NUM_FAKE_USERS}) Usuario Creado: {new_user.email} (ID: {new_user.id})")
    return user_ids

def generate_data() -> None:
    """
    Genera usuarios, reseñas, "me gusta" y listas de lectura falsas.

    Returns:
        None
    """
    logger.info("=============================================")
    logger.info(" Iniciando script de generación de datos falsos")
    logger.info("=============================================")

    db: Optional[Session] = None
    try:
        logger.info("Abriendo sesión de base de datos...")
        db = SessionLocal()

        logger.info(f"--- Fase 1: Creando {NUM_FAKE_USERS} Usuarios Falsos ---")
        user_ids = create_fake_users(db)
        if not user_ids:
            logger.error("No se pudieron crear usuarios. Abortando.")
            return

        logger.info("--- Fase 2: Obteniendo IDs de Libros Existentes ---")
        book_ids: List[int] = [id_tuple[0] for id_tuple in db.query(Book.id).all()]
        if not book_ids:
            logger.error("No hay libros en la base de datos. Ejecuta antes populate_db.py.")
            return
        logger.info(f"Se encontraron {len(book_ids)} libros disponibles.")

        logger.info(f"--- Fase 3: Generando Reseñas Falsas ({MIN_REVIEWS_PER_USER}-{MAX_REVIEWS_PER_USER} por usuario) ---")
        review_ids: List[int] = []
        for user_id in user_ids:
            num_reviews: int = min(random.randint(MIN_REVIEWS_PER_USER, MAX_REVIEWS_PER_USER), len(book_ids))
            for book_id in random.sample(book_ids, num_reviews):
                review_in = ReviewCreate(
                    rating=random.randint(1, 5),
                    title=fake.sentence(nb_words=5)[:255] if random.random() < 0.5 else None,
                    content=fake.paragraph(nb_sentences=random.randint(1, 4)) if random.random() < 0.7 else None,
                )
                try:
                    review = create_review(db=db, review=review_in, user_id=user_id, book_id=book_id)
                except LibrotecaError as e:
                    logger.error(f"  Error creando review para User {user_id}, Book {book_id}: {e.message}")
                    continue
                review_ids.append(review.id)
        logger.info(f"--- Fase 3 Completada: {len(review_ids)} reseñas añadidas ---")

        logger.info("--- Fase 4: Generando \"me gusta\" y listas de lectura ---")
        total_likes: int = 0
        total_entries: int = 0
        for user_id in user_ids:
            for review_id in random.sample(review_ids, min(random.randint(0, MAX_LIKES_PER_USER), len(review_ids))):
                like_review(db, user_id=user_id, review_id=review_id)
                total_likes += 1
            for book_id in random.sample(book_ids, min(random.randint(0, MAX_READING_LIST_PER_USER), len(book_ids))):
                add_or_update(db, user_id=user_id, book_id=book_id, status=random.choice(READING_STATUSES))
                total_entries += 1
        logger.info(f"--- Fase 4 Completada: {total_likes} \"me gusta\", {total_entries} entradas de lista ---")

    except LibrotecaError as e:
        logger.exception(f"Error CRÍTICO durante la generación de datos: {e.message}")
    finally:
        if db:
            logger.info("Cerrando sesión de base de datos.")
            db.close()

if __name__ == "__main__":
    init_db()
    generate_data()
    logger.info("============================================")
    logger.info(" Script de Generación de Datos Finalizado")
    logger.info("============================================")
