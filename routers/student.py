from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from config.settings import settings
from dependencies.security import CurrentUser, require_student
from dependencies.services import get_attendance_queries, get_roster_service
from schemas.attendance import AttendanceWithSubject
from schemas.common import ERROR_RESPONSES
from schemas.students import Student as StudentSchema
from schemas.timetable import TimetableEntry
from services.attendance_queries import AttendanceQueries
from services.roster_service import RosterService

router = APIRouter(prefix="/student", tags=["학생"], responses=ERROR_RESPONSES)

# ✅ 응답 형식 정의
class MyAttendance(BaseModel):
    student: StudentSchema
    records: List[AttendanceWithSubject]

# ✅ [READ] 내 출결 기록 (최근 날짜순)
@router.get("/attendance", response_model=MyAttendance)
def read_my_attendance(
    user: CurrentUser = Depends(require_student),
    roster: RosterService = Depends(get_roster_service),
    queries: AttendanceQueries = Depends(get_attendance_queries),
):
    student = roster.get_student_for_user(user.user_id)
    records = queries.list_by_student(student.id)
    return MyAttendance(
        student=StudentSchema.model_validate(student),
        records=[AttendanceWithSubject.model_validate(r) for r in records],
    )

# ✅ [READ] 오늘 시간표
@router.get("/timetable", response_model=List[TimetableEntry], dependencies=[Depends(require_student)])
def read_today_timetable(roster: RosterService = Depends(get_roster_service)):
    today = datetime.now(ZoneInfo(settings.TIMEZONE))
    return [TimetableEntry.model_validate(e) for e in roster.timetable_for(today)]
