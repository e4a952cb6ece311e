# src/libroteca/api/routes/users.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from libroteca.crud import get_user, get_user_stats, update_user
from libroteca.db.session import get_db
from libroteca.schemas.user import UserSchema, UserStats, UserUpdate
from libroteca.api.deps import get_current_user_id

router = APIRouter(prefix="/api", tags=["users"])

@router.get("/auth/user", response_model=UserSchema)
def get_authenticated_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

@router.get("/users/{user_id}", response_model=UserSchema)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

@router.get("/users/{user_id}/stats", response_model=UserStats)
def get_profile_stats(user_id: str, db: Session = Depends(get_db)):
    return get_user_stats(db, user_id)

@router.put("/users/{user_id}", response_model=UserSchema)
def put_profile(
    user_id: str,
    updates: UserUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return update_user(db, user_id=user_id, updates=updates, requesting_user_id=current_user_id)
