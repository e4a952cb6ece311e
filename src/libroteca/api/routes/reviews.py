# src/libroteca/api/routes/reviews.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from libroteca.crud import count_review_likes, delete_review, like_review, unlike_review
from libroteca.db.session import get_db
from libroteca.schemas.review import LikeResponse
from libroteca.api.deps import get_current_user_id

router = APIRouter(prefix="/api/reviews", tags=["reviews"])

@router.delete("/{review_id}")
def remove_review(
    review_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    delete_review(db, review_id=review_id, requesting_user_id=user_id)
    return {"message": "Review deleted"}

@router.post("/{review_id}/like", response_model=LikeResponse)
def post_like(
    review_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    like_review(db, user_id=user_id, review_id=review_id)
    return LikeResponse(message="Review liked", review_id=review_id, like_count=count_review_likes(db, review_id))

@router.delete("/{review_id}/like", response_model=LikeResponse)
def delete_like(
    review_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    unlike_review(db, user_id=user_id, review_id=review_id)
    return LikeResponse(message="Review unliked", review_id=review_id, like_count=count_review_likes(db, review_id))
