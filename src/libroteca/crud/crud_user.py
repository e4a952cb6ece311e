"""
Operaciones CRUD para el modelo User en la base de datos de Libroteca.
Incluye la sincronización de identidades desde la capa de autenticación,
la edición del perfil propio y las estadísticas del perfil.
"""

import logging
from sqlalchemy.orm import Session
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional

from ..models.user import User
from ..models.review import Review
from ..models.reading_list import ReadingListEntry, READ, WANT_TO_READ
from ..schemas.user import UserUpdate, UserUpsert, UserStats
from ..core.exceptions import ForbiddenError, StoreError, ValidationError
from .dialects import upsert_insert

logger = logging.getLogger(__name__)

def get_user(db: Session, user_id: str) -> Optional[User]:
    """
    Obtiene un usuario por su ID.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        user_id (str): ID del usuario.

    Returns:
        Optional[User]: El usuario si existe, None si no.
    """
    return db.get(User, user_id)

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Obtiene un usuario por su email.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        email (str): Email del usuario a buscar.

    Returns:
        Optional[User]: El usuario si existe, None si no.
    """
    return db.query(User).filter(User.email == email).first()

def upsert_user(db: Session, user: UserUpsert) -> User:
    """
    Inserta el usuario o, si ya existe, actualiza los campos enviados.

    Solo se escriben los campos presentes en `user`; el ID nunca cambia.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        user (UserUpsert): Identidad y campos de perfil.

    Returns:
        User: El usuario tras el upsert.

    Raises:
        ValidationError: Si el email ya pertenece a otro usuario.
        StoreError: Si falla la escritura.
    """
    values = user.model_dump(exclude_unset=True)
    values["id"] = user.id
    stmt = upsert_insert(db, User).values(**values)
    updates = {key: stmt.excluded[key] for key in values if key != "id"}
    updates["updated_at"] = func.now()
    stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=updates)
    try:
        db.execute(stmt)
        db.commit()
    except IntegrityError as e:
        logger.warning(f"Rejected profile data for user {user.id}: {e.orig}")
        db.rollback()
        raise ValidationError("Invalid user data", {"email": "already in use"}) from e
    except SQLAlchemyError as e:
        logger.exception(f"Error upserting user {user.id}: {e}")
        db.rollback()
        raise StoreError("Failed to save user") from e

    return db.execute(
        select(User).where(User.id == user.id).execution_options(populate_existing=True)
    ).scalar_one()

def ensure_user(db: Session, user_id: str) -> User:
    """
    Devuelve el usuario, creándolo vacío si la capa de autenticación aún no
    lo había sincronizado.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        user_id (str): ID autenticado.

    Returns:
        User: El usuario existente o recién creado.
    """
    user = get_user(db, user_id)
    if user is not None:
        return user
    logger.info(f"First request from user {user_id}; creating profile")
    return upsert_user(db, UserUpsert(id=user_id))

def update_user(db: Session, user_id: str, updates: UserUpdate, requesting_user_id: str) -> User:
    """
    Actualiza el perfil de un usuario. Solo el propio usuario puede hacerlo.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        user_id (str): Usuario cuyo perfil se edita.
        updates (UserUpdate): Campos a modificar.
        requesting_user_id (str): Usuario autenticado que hace la petición.

    Returns:
        User: El usuario actualizado.

    Raises:
        ForbiddenError: Si `user_id` no es el usuario autenticado.
    """
    if user_id != requesting_user_id:
        logger.error(f"Unauthorized attempt: User {requesting_user_id} tried to update profile of {user_id}")
        raise ForbiddenError("Cannot update another user's profile")

    fields = updates.model_dump(exclude_unset=True)
    user = upsert_user(db, UserUpsert(id=user_id, **fields))
    logger.info(f"Profile of user {user_id} updated: {sorted(fields)}")
    return user

def get_user_stats(db: Session, user_id: str) -> UserStats:
    """
    Calcula los contadores del perfil con tres consultas independientes.

    `followers` se devuelve como None: no existe grafo de seguidores.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        user_id (str): ID del usuario.

    Returns:
        UserStats: Libros leídos, reseñas escritas y libros pendientes.
    """
    books_read = db.execute(
        select(func.count(ReadingListEntry.id))
        .where(ReadingListEntry.user_id == user_id, ReadingListEntry.status == READ)
    ).scalar_one()

    reviews_written = db.execute(
        select(func.count(Review.id)).where(Review.user_id == user_id)
    ).scalar_one()

    to_read_list = db.execute(
        select(func.count(ReadingListEntry.id))
        .where(ReadingListEntry.user_id == user_id, ReadingListEntry.status == WANT_TO_READ)
    ).scalar_one()

    return UserStats(
        books_read=books_read,
        reviews_written=reviews_written,
        to_read_list=to_read_list,
        followers=None,
    )
