# src/libroteca/api/routes/books.py

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from libroteca.core.config import settings
from libroteca.crud import (
    BookFilter,
    list_books,
    get_featured_books,
    get_book_by_id,
    create_book,
    list_reviews,
    create_review,
)
from libroteca.db.session import get_db
from libroteca.schemas.book import BookCreate, BookSchema, PaginatedBooks
from libroteca.schemas.review import ReviewCreate, ReviewSchema, ReviewWithAuthorSchema
from libroteca.schemas.user import UserSchema
from libroteca.api.deps import get_current_user_id

router = APIRouter(prefix="/api/books", tags=["books"])

@router.get("", response_model=PaginatedBooks)
def get_books(
    search: Optional[str] = Query(None, description="Case-insensitive match on title or author"),
    genre: Optional[str] = Query(None, description="Exact genre"),
    rating: Optional[str] = Query(None, description="Minimum average rating, e.g. '4+'"),
    year: Optional[str] = Query(None, description="Publication year, or 'older' for before 2022"),
    sort_by: str = Query("popular", alias="sortBy", description="popular, rating, recent or title"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="Page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    db: Session = Depends(get_db)
):
    """
    Get a paginated list of books.

    Filters combine with AND. Malformed rating/year values are ignored
    rather than rejected.
    """
    filters = BookFilter.from_params(search=search, genre=genre, rating=rating, year=year)
    books, total = list_books(db, filters=filters, sort_by=sort_by, page=page, page_size=limit)

    return PaginatedBooks(
        items=[BookSchema.model_validate(book) for book in books],
        total=total,
        page=page,
        page_size=limit,
        total_pages=(total + limit - 1) // limit,
    )

@router.get("/featured", response_model=List[BookSchema])
def get_featured(db: Session = Depends(get_db)):
    return get_featured_books(db)

@router.get("/{book_id}", response_model=BookSchema)
def get_book(book_id: int, db: Session = Depends(get_db)):
    book = get_book_by_id(db, book_id)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return book

@router.post("", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
def post_book(
    book: BookCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return create_book(db, book)

@router.get("/{book_id}/reviews", response_model=List[ReviewWithAuthorSchema])
def get_book_reviews(
    book_id: int,
    sort_by: str = Query("recent", alias="sortBy", description="recent, helpful, rating-high or rating-low"),
    db: Session = Depends(get_db)
):
    if get_book_by_id(db, book_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    rows = list_reviews(db, book_id, sort_by=sort_by)
    return [
        ReviewWithAuthorSchema(
            **ReviewSchema.model_validate(row.Review).model_dump(),
            author=UserSchema.model_validate(row.User) if row.User is not None else None,
            like_count=row.like_count,
        )
        for row in rows
    ]

@router.post("/{book_id}/reviews", response_model=ReviewSchema, status_code=status.HTTP_201_CREATED)
def post_book_review(
    book_id: int,
    review: ReviewCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return create_review(db, review=review, user_id=user_id, book_id=book_id)
