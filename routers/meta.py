from fastapi import APIRouter
from config.settings import settings

router = APIRouter(prefix="/meta", tags=["Meta"])

@router.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

# ✅ 클라이언트 화면에서 쓰는 정책 값
@router.get("/limits")
def limits():
    return {
        "attendance_daily_limit": settings.ATTENDANCE_DAILY_LIMIT,
        "page_size_default": settings.PAGE_SIZE_DEFAULT,
        "timezone": settings.TIMEZONE,
    }
