from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.orm import Session
from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..models.review import Review
from ..models.review_like import ReviewLike
from ..models.user import User
from ..models.book import Book
from ..schemas.review import ReviewCreate
from ..core.exceptions import ForbiddenError, NotFoundError, StoreError
from .dialects import upsert_insert

logger = logging.getLogger(__name__)

RATING_PLACES = Decimal("0.01")
REVIEW_SORT_OPTIONS = ("recent", "helpful", "rating-high", "rating-low")


def _round_rating(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(RATING_PLACES, rounding=ROUND_HALF_UP)


def recompute_book_stats(db: Session, book_id: int) -> Book | None:
    """
    Recalculates a book's average rating and review count from its reviews
    and writes both back to the book row.

    The book row is locked first (FOR UPDATE, where the dialect supports it)
    so concurrent review writes for the same book serialize. The caller owns
    the transaction: no commit here, and pending review changes must be
    flushed before calling.
    """
    book = db.execute(
        select(Book).where(Book.id == book_id).with_for_update()
    ).scalar_one_or_none()
    if book is None:
        logger.warning(f"Stats recompute skipped: book {book_id} does not exist")
        return None

    avg_rating, review_count = db.execute(
        select(func.avg(Review.rating), func.count(Review.id))
        .where(Review.book_id == book_id)
    ).one()

    book.average_rating = _round_rating(avg_rating)
    book.review_count = review_count or 0
    db.add(book)
    return book


def create_review(db: Session, review: ReviewCreate, user_id: str, book_id: int) -> Review:
    """Inserts a review and refreshes the book's stats in one transaction."""
    if db.get(Book, book_id) is None:
        raise NotFoundError(f"Book {book_id} not found")

    db_review = Review(
        **review.model_dump(),
        user_id=user_id,
        book_id=book_id,
    )
    try:
        db.add(db_review)
        db.flush() # Review must be visible to the aggregate query

        # --- Update stats within the SAME transaction ---
        recompute_book_stats(db=db, book_id=book_id)

        db.commit() # Commit both review and stats update together
        db.refresh(db_review)
    except SQLAlchemyError as e:
        logger.exception(f"Error committing review creation/stats update for book {book_id}: {e}")
        db.rollback()
        raise StoreError("Failed to create review") from e

    logger.info(f"Review {db_review.id} created for book {book_id} by user {user_id}. Book stats updated.")
    return db_review


def get_review_by_id(db: Session, review_id: int) -> Review | None:
    return db.get(Review, review_id)


def delete_review(db: Session, review_id: int, requesting_user_id: str) -> None:
    """
    Permanently deletes a review (and its likes) written by the requesting
    user, then refreshes the book's stats in the same transaction.

    Raises NotFoundError if the review does not exist and ForbiddenError if
    the requester is not its author.
    """
    db_review = get_review_by_id(db, review_id)

    if not db_review:
        logger.warning(f"Attempted delete of non-existent review ID: {review_id}")
        raise NotFoundError(f"Review {review_id} not found")

    # --- Permission Check ---
    if db_review.user_id != requesting_user_id:
        logger.error(f"Unauthorized attempt: User {requesting_user_id} tried to delete review {review_id} owned by {db_review.user_id}")
        raise ForbiddenError("Cannot delete another user's review")

    book_id = db_review.book_id # Get book_id BEFORE deleting

    try:
        db.delete(db_review)
        db.flush() # The aggregate must no longer see the deleted review

        recompute_book_stats(db=db, book_id=book_id)

        db.commit()
    except SQLAlchemyError as e:
        logger.exception(f"Error committing delete/stats update for review ID {review_id}: {e}")
        db.rollback()
        raise StoreError("Failed to delete review") from e

    logger.info(f"Review {review_id} deleted by user {requesting_user_id}. Stats for book {book_id} updated.")


def list_reviews(db: Session, book_id: int, sort_by: str | None = "recent") -> list:
    """
    Returns every review of a book with its author and like count.

    Each row is ``(Review, User | None, like_count)``. Reviews are outer-joined
    to a per-review like count so reviews nobody liked come back with 0.

    sort_by: ``helpful`` (most liked first), ``rating-high``, ``rating-low``
    or ``recent`` (default, newest first). Ties are broken by review id.
    """
    likes_subq = (
        select(ReviewLike.review_id, func.count(ReviewLike.id).label("like_count"))
        .group_by(ReviewLike.review_id)
        .subquery()
    )
    like_count = func.coalesce(likes_subq.c.like_count, 0)

    if sort_by == "helpful":
        order = desc(like_count)
    elif sort_by == "rating-high":
        order = desc(Review.rating)
    elif sort_by == "rating-low":
        order = asc(Review.rating)
    else:
        order = desc(Review.created_at)

    stmt = (
        select(Review, User, like_count.label("like_count"))
        .outerjoin(User, Review.user_id == User.id)
        .outerjoin(likes_subq, likes_subq.c.review_id == Review.id)
        .where(Review.book_id == book_id)
        .order_by(order, asc(Review.id))
    )
    return db.execute(stmt).all()


def count_review_likes(db: Session, review_id: int) -> int:
    return db.execute(
        select(func.count(ReviewLike.id)).where(ReviewLike.review_id == review_id)
    ).scalar_one()


def like_review(db: Session, user_id: str, review_id: int) -> None:
    """Records a like. Liking the same review twice is a no-op."""
    if get_review_by_id(db, review_id) is None:
        raise NotFoundError(f"Review {review_id} not found")

    stmt = upsert_insert(db, ReviewLike)\
        .values(user_id=user_id, review_id=review_id)\
        .on_conflict_do_nothing(index_elements=["user_id", "review_id"])
    try:
        db.execute(stmt)
        db.commit()
    except SQLAlchemyError as e:
        logger.exception(f"Error liking review {review_id} for user {user_id}: {e}")
        db.rollback()
        raise StoreError("Failed to like review") from e
    logger.info(f"User {user_id} liked review {review_id}")


def unlike_review(db: Session, user_id: str, review_id: int) -> bool:
    """Removes a like if present. Returns whether a like was removed."""
    try:
        result = db.execute(
            delete(ReviewLike).where(
                ReviewLike.user_id == user_id,
                ReviewLike.review_id == review_id,
            )
        )
        db.commit()
    except SQLAlchemyError as e:
        logger.exception(f"Error unliking review {review_id} for user {user_id}: {e}")
        db.rollback()
        raise StoreError("Failed to unlike review") from e

    removed = result.rowcount > 0
    if not removed:
        logger.info(f"User {user_id} had not liked review {review_id}. No action taken.")
    return removed
