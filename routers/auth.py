import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from models.users import User as UserModel, ROLE_ADMIN
from schemas.common import ERROR_RESPONSES
from services.exceptions import MissingField
from utils.security import check_password, sign_token

router = APIRouter(
    prefix="/auth",
    tags=["인증"],
    responses={code: ERROR_RESPONSES[code] for code in (400, 500)},
)
logger = logging.getLogger(__name__)

# ✅ 요청 형식 정의
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

# ✅ 응답 형식 정의
class LoginResponse(BaseModel):
    token: str
    role: str

# ✅ [LOGIN] 로그인 API
@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    email = (request.email or "").strip()
    password = (request.password or "").strip()
    if not email or not password:
        raise MissingField("Email and password required")

    # 관리자 계정은 설정값으로 확인
    if email == settings.ADMIN_EMAIL and password == settings.ADMIN_PASSWORD:
        return {"token": sign_token({"user_id": "admin", "role": ROLE_ADMIN}), "role": ROLE_ADMIN}

    user = db.query(UserModel).filter(UserModel.email == email).first()
    if not user or not check_password(password, user.password):
        logger.info(f"Login failed for {email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"token": sign_token({"user_id": user.id, "role": user.role}), "role": user.role}
