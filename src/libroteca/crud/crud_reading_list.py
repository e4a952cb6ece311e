"""
Reading list operations: one entry per (user, book), upserted on add,
partially updated, hard-deleted on removal.
"""

import logging
from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..models.book import Book
from ..models.reading_list import ReadingListEntry, READING_STATUSES, WANT_TO_READ
from ..schemas.reading_list import ReadingListUpdate
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from .dialects import upsert_insert

logger = logging.getLogger(__name__)


def get_reading_list_entry(db: Session, user_id: str, book_id: int) -> ReadingListEntry | None:
    stmt = select(ReadingListEntry)\
        .where(ReadingListEntry.user_id == user_id, ReadingListEntry.book_id == book_id)\
        .execution_options(populate_existing=True)
    return db.execute(stmt).scalar_one_or_none()


def add_or_update(db: Session, user_id: str, book_id: int, status: str = WANT_TO_READ) -> ReadingListEntry:
    """
    Adds a book to the user's reading list. If the book is already there, its
    status is overwritten and ``updated_at`` refreshed instead.
    """
    if status not in READING_STATUSES:
        raise ValidationError("Invalid reading list data", {"status": f"must be one of {', '.join(READING_STATUSES)}"})
    if db.get(Book, book_id) is None:
        raise NotFoundError(f"Book {book_id} not found")

    stmt = upsert_insert(db, ReadingListEntry)\
        .values(user_id=user_id, book_id=book_id, status=status)
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "book_id"],
        set_={"status": stmt.excluded.status, "updated_at": func.now()},
    )
    try:
        db.execute(stmt)
        db.commit()
    except SQLAlchemyError as e:
        logger.exception(f"Error upserting reading list entry ({user_id}, {book_id}): {e}")
        db.rollback()
        raise StoreError("Failed to add to reading list") from e

    logger.info(f"Reading list entry ({user_id}, {book_id}) set to '{status}'")
    return get_reading_list_entry(db, user_id, book_id)


def update_entry(db: Session, user_id: str, book_id: int, updates: ReadingListUpdate) -> ReadingListEntry:
    """Writes only the fields explicitly set on ``updates``."""
    entry = get_reading_list_entry(db, user_id, book_id)
    if entry is None:
        raise NotFoundError(f"Book {book_id} is not on the reading list")

    fields = updates.model_dump(exclude_unset=True)
    for field, value in fields.items():
        setattr(entry, field, value)

    try:
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        logger.exception(f"Error updating reading list entry ({user_id}, {book_id}): {e}")
        db.rollback()
        raise StoreError("Failed to update reading list entry") from e

    logger.info(f"Reading list entry ({user_id}, {book_id}) updated: {sorted(fields)}")
    return entry


def remove_entry(db: Session, user_id: str, book_id: int) -> bool:
    """Hard delete. Removing a book that is not on the list is a no-op."""
    try:
        result = db.execute(
            delete(ReadingListEntry).where(
                ReadingListEntry.user_id == user_id,
                ReadingListEntry.book_id == book_id,
            )
        )
        db.commit()
    except SQLAlchemyError as e:
        logger.exception(f"Error removing reading list entry ({user_id}, {book_id}): {e}")
        db.rollback()
        raise StoreError("Failed to remove from reading list") from e

    removed = result.rowcount > 0
    if not removed:
        logger.info(f"Book {book_id} was not on user {user_id}'s reading list. No action taken.")
    return removed


def get_reading_list(db: Session, user_id: str, status: str | None = None) -> list[ReadingListEntry]:
    """Entries with their book loaded, newest first."""
    stmt = select(ReadingListEntry)\
        .options(joinedload(ReadingListEntry.book))\
        .where(ReadingListEntry.user_id == user_id)
    if status:
        stmt = stmt.where(ReadingListEntry.status == status)
    stmt = stmt.order_by(desc(ReadingListEntry.created_at), desc(ReadingListEntry.id))
    return db.execute(stmt).scalars().all()
