"""
Filter and sort composition for the book catalog.

Raw query-string values are parsed into a ``BookFilter`` once, then turned
into SQLAlchemy clauses by ``build_book_conditions`` and
``build_book_ordering``. Nothing here touches the database, so the
composition can be tested on its own.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy import asc, desc, or_

from ..models.book import Book

logger = logging.getLogger(__name__)

# "older" in the year filter means published before this year
OLDER_YEAR_THRESHOLD = 2022
OLDER = "older"
# Same bounds as BookBase.published_year
MIN_YEAR = 0
MAX_YEAR = 9999

DEFAULT_SORT = "popular"
SORT_OPTIONS = ("popular", "rating", "recent", "title")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_min_rating(value: Optional[str]) -> Optional[Decimal]:
    """Parse ``"4+"`` style values. Returns None for anything malformed."""
    value = _clean(value)
    if value is None:
        return None
    try:
        min_rating = Decimal(value.rstrip("+").strip())
    except InvalidOperation:
        logger.warning(f"Ignoring malformed rating filter: {value!r}")
        return None
    if not min_rating.is_finite():
        logger.warning(f"Ignoring malformed rating filter: {value!r}")
        return None
    return min_rating


def parse_year(value: Optional[str]) -> Optional[str | int]:
    """Parse the year filter into an int, the literal ``"older"``, or None."""
    value = _clean(value)
    if value is None:
        return None
    if value.lower() == OLDER:
        return OLDER
    try:
        year = int(value)
    except ValueError:
        logger.warning(f"Ignoring malformed year filter: {value!r}")
        return None
    if not MIN_YEAR <= year <= MAX_YEAR:
        logger.warning(f"Ignoring out-of-range year filter: {value!r}")
        return None
    return year


@dataclass(frozen=True)
class BookFilter:
    """Parsed catalog filter. Every field is optional and fields combine with AND."""

    search: Optional[str] = None
    genre: Optional[str] = None
    min_rating: Optional[Decimal] = None
    year: Optional[str | int] = None

    @classmethod
    def from_params(
        cls,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        rating: Optional[str] = None,
        year: Optional[str] = None,
    ) -> "BookFilter":
        return cls(
            search=_clean(search),
            genre=_clean(genre),
            min_rating=parse_min_rating(rating),
            year=parse_year(year),
        )

    @property
    def is_empty(self) -> bool:
        return self.search is None and self.genre is None and self.min_rating is None and self.year is None


def build_book_conditions(filters: BookFilter) -> List:
    """Translate a ``BookFilter`` into a list of WHERE clauses."""
    conditions = []

    if filters.search:
        conditions.append(or_(
            Book.title.icontains(filters.search, autoescape=True),
            Book.author.icontains(filters.search, autoescape=True),
        ))

    if filters.genre:
        conditions.append(Book.genre == filters.genre)

    if filters.min_rating is not None:
        conditions.append(Book.average_rating >= filters.min_rating)

    if filters.year == OLDER:
        conditions.append(Book.published_year < OLDER_YEAR_THRESHOLD)
    elif filters.year is not None:
        conditions.append(Book.published_year == filters.year)

    return conditions


def build_book_ordering(sort_by: Optional[str]) -> List:
    """ORDER BY clauses for a sort option. Unknown options sort by popularity."""
    if sort_by == "rating":
        ordering = [desc(Book.average_rating)]
    elif sort_by == "recent":
        ordering = [desc(Book.created_at)]
    elif sort_by == "title":
        ordering = [asc(Book.title)]
    else:
        ordering = [desc(Book.review_count)]
    # Tie-break on the primary key so pages never overlap
    ordering.append(asc(Book.id))
    return ordering
