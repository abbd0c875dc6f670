from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from config.settings import settings
from dependencies.security import require_admin
from dependencies.services import get_attendance_queries, get_attendance_service, get_roster_service
from schemas.attendance import (
    AttendanceCreate,
    AttendanceUpdate,
    Attendance as AttendanceSchema,
    AttendanceDetail,
    AttendanceWithSubject,
)
from schemas.common import ERROR_RESPONSES, AttendancePage, StudentPage, make_pagination
from schemas.students import StudentCreate, StudentUpdate, Student as StudentSchema, StudentCreated, StudentWithUser
from schemas.subjects import Subject as SubjectSchema
from services.attendance_queries import AttendanceQueries
from services.attendance_rules import AttendancePatch
from services.attendance_service import AttendanceService
from services.roster_service import RosterService

router = APIRouter(
    prefix="/admin",
    tags=["관리자"],
    dependencies=[Depends(require_admin)],
    responses=ERROR_RESPONSES,
)

# ==========================================================
# [1단계] 학생 명단
# ==========================================================

# ✅ [CREATE] 학생 + 계정 추가 (임시 비밀번호 반환)
@router.post("/students", response_model=StudentCreated)
def create_student(body: StudentCreate, roster: RosterService = Depends(get_roster_service)):
    student, password = roster.create_student(
        name=body.name, email=body.email, roll_number=body.roll_number
    )
    return StudentCreated(student=StudentSchema.model_validate(student), password=password)

# ✅ [READ] 학생 명단 (이름순, 페이지네이션)
@router.get("/students", response_model=StudentPage)
def read_students(
    page: Optional[str] = Query(None, description="페이지 (1부터)"),
    limit: Optional[str] = Query(None, description="페이지당 개수 (기본 6)"),
    roster: RosterService = Depends(get_roster_service),
):
    result = roster.list_students(page, limit, default_limit=settings.PAGE_SIZE_DEFAULT)
    return StudentPage(
        students=[StudentWithUser.model_validate(s) for s in result.items],
        pagination=make_pagination(result),
    )

# ✅ [UPDATE] 학생 정보 수정 (보낸 항목만)
@router.put("/students/{student_id}", response_model=StudentSchema)
def update_student(
    student_id: int,
    body: StudentUpdate,
    roster: RosterService = Depends(get_roster_service),
):
    student = roster.update_student(
        student_id, name=body.name, email=body.email, roll_number=body.roll_number
    )
    return StudentSchema.model_validate(student)

# ✅ [DELETE] 학생 삭제 (출결 기록/계정 함께 삭제)
@router.delete("/students/{student_id}")
def delete_student(student_id: int, roster: RosterService = Depends(get_roster_service)):
    roster.delete_student(student_id)
    return {"message": "Student deleted successfully"}

# ✅ [READ] 과목 목록
@router.get("/subjects", response_model=List[SubjectSchema])
def read_subjects(roster: RosterService = Depends(get_roster_service)):
    return [SubjectSchema.model_validate(s) for s in roster.list_subjects()]

# ==========================================================
# [2단계] 출결 기록
# ==========================================================

# ✅ [CREATE] 출결 기록 추가 (과목별 하루 최대 4건)
@router.post("/attendance", response_model=AttendanceSchema)
def create_attendance(body: AttendanceCreate, service: AttendanceService = Depends(get_attendance_service)):
    record = service.create(
        student_id=body.student_id,
        subject_id=body.subject_id,
        date=body.date,
        status=body.status,
    )
    return AttendanceSchema.model_validate(record)

# ✅ [READ] 전체 출결 기록 (최근 날짜순, 페이지네이션)
@router.get("/attendance", response_model=AttendancePage)
def read_attendance_list(
    page: Optional[str] = Query(None, description="페이지 (1부터)"),
    limit: Optional[str] = Query(None, description="페이지당 개수 (기본 6)"),
    queries: AttendanceQueries = Depends(get_attendance_queries),
):
    result = queries.list_all(page, limit)
    return AttendancePage(
        records=[AttendanceDetail.model_validate(r) for r in result.items],
        pagination=make_pagination(result),
    )

# ✅ [READ] 특정 학생 출결 기록
@router.get("/attendance/{student_id}", response_model=List[AttendanceWithSubject])
def read_student_attendance(student_id: int, queries: AttendanceQueries = Depends(get_attendance_queries)):
    return [AttendanceWithSubject.model_validate(r) for r in queries.list_by_student(student_id)]

# ✅ [UPDATE] 출결 기록 수정 (부분 수정, 중복/개수 재검사)
@router.put("/attendance/{attendance_id}", response_model=AttendanceDetail)
def update_attendance(
    attendance_id: int,
    body: AttendanceUpdate,
    service: AttendanceService = Depends(get_attendance_service),
):
    record = service.update(attendance_id, AttendancePatch(**body.model_dump()))
    return AttendanceDetail.model_validate(record)

# ✅ [DELETE] 출결 기록 삭제
@router.delete("/attendance/{attendance_id}")
def delete_attendance(attendance_id: int, service: AttendanceService = Depends(get_attendance_service)):
    service.delete(attendance_id)
    return {"message": "Attendance record deleted successfully"}
