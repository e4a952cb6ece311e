# src/libroteca/api/deps.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from libroteca.core.config import settings
from libroteca.crud import ensure_user
from libroteca.db.session import get_db


def get_optional_user_id(request: Request) -> Optional[str]:
    """Identity forwarded by the upstream auth layer, if any."""
    user_id = request.headers.get(settings.USER_ID_HEADER, "").strip()
    return user_id or None


def get_current_user_id(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
) -> str:
    """
    Requires an authenticated identity and makes sure the user row exists,
    so writes that reference the user never dangle.
    """
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    ensure_user(db, user_id)
    return user_id
