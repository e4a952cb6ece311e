# src/libroteca/api/routes/reading_list.py

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from libroteca.crud import add_or_update, get_reading_list, remove_entry, update_entry
from libroteca.db.session import get_db
from libroteca.schemas.reading_list import (
    ReadingListCreate,
    ReadingListEntrySchema,
    ReadingListItemSchema,
    ReadingListUpdate,
    ReadingStatus,
)
from libroteca.api.deps import get_current_user_id

router = APIRouter(prefix="/api/reading-list", tags=["reading-list"])

@router.get("", response_model=List[ReadingListItemSchema])
def get_list(
    status_filter: Optional[ReadingStatus] = Query(None, alias="status", description="want_to_read, reading or read"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return get_reading_list(db, user_id, status=status_filter)

@router.post("", response_model=ReadingListEntrySchema, status_code=status.HTTP_201_CREATED)
def post_entry(
    item: ReadingListCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return add_or_update(db, user_id=user_id, book_id=item.book_id, status=item.status)

@router.put("/{book_id}", response_model=ReadingListEntrySchema)
def put_entry(
    book_id: int,
    updates: ReadingListUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return update_entry(db, user_id=user_id, book_id=book_id, updates=updates)

@router.delete("/{book_id}")
def delete_entry(
    book_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    remove_entry(db, user_id=user_id, book_id=book_id)
    return {"message": "Removed from reading list"}
