from fastapi import Depends
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from services.attendance_queries import AttendanceQueries
from services.attendance_service import AttendanceService
from services.attendance_store import SqlAlchemyAttendanceStore
from services.roster_service import RosterService


# ✅ 요청마다 세션 단위로 저장소/서비스 생성 (전역 상태 없음)
def get_attendance_store(db: Session = Depends(get_db)) -> SqlAlchemyAttendanceStore:
    return SqlAlchemyAttendanceStore(db)


def get_attendance_service(
    store: SqlAlchemyAttendanceStore = Depends(get_attendance_store),
) -> AttendanceService:
    return AttendanceService(
        store,
        daily_limit=settings.ATTENDANCE_DAILY_LIMIT,
        timezone=settings.TIMEZONE,
    )


def get_attendance_queries(
    store: SqlAlchemyAttendanceStore = Depends(get_attendance_store),
) -> AttendanceQueries:
    return AttendanceQueries(store, default_limit=settings.PAGE_SIZE_DEFAULT)


def get_roster_service(db: Session = Depends(get_db)) -> RosterService:
    return RosterService(db)
