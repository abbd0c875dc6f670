from typing import Optional, Annotated
from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from models.users import ROLE_ADMIN, ROLE_STUDENT
from utils.security import verify_token

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


class CurrentUser(BaseModel):
    user_id: str | int
    role: str


def get_current_user(authorization: AuthHeader = None) -> CurrentUser:
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # "Bearer <token>" 파싱
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(token.strip())
    if not payload or "role" not in payload or "user_id" not in payload:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(user_id=payload["user_id"], role=payload["role"])


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Forbidden: admin only")
    return user


def require_student(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != ROLE_STUDENT:
        raise HTTPException(status_code=403, detail="Forbidden: students only")
    return user
