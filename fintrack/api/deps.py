"""Request dependencies: bearer token -> current user"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fintrack.config import JWT_ALGORITHM, JWT_EXPIRES_DAYS, JWT_SECRET
from fintrack.database.config import get_db
from fintrack.database.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: int, expires_days: int = JWT_EXPIRES_DAYS) -> str:
    payload = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(days=expires_days),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> int:
    """Id of the user named by `Authorization: Bearer <token>`; 401 otherwise."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        payload = jwt.decode(credentials.credentials, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        user_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Unauthorized")

    if not db.query(User.id).filter(User.id == user_id).first():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id
