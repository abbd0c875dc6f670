from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from schemas.students import Student
from schemas.subjects import Subject

# ✅ 출결 등록용 (POST) - 필수값 누락은 규칙 검사에서 MissingField로 응답
class AttendanceCreate(BaseModel):
    student_id: Optional[int] = None         # 학생 ID
    subject_id: Optional[int] = None         # 과목 ID
    date: Optional[str] = None               # 출결 시각 (ISO 8601, 날짜만 가능)
    status: Optional[str] = None             # 출결 상태 (PRESENT, ABSENT)

# ✅ 출결 수정용 (PUT) - 보내지 않은 항목은 기존 값 유지
class AttendanceUpdate(AttendanceCreate):
    pass

# ✅ 출결 기록 기본 출력
class Attendance(BaseModel):
    id: int
    student_id: int
    subject_id: int
    date: datetime
    status: str

    model_config = ConfigDict(from_attributes=True)

# ✅ 과목 포함 (학생별 조회)
class AttendanceWithSubject(Attendance):
    subject: Optional[Subject] = None

# ✅ 학생 + 과목 포함 (전체 목록, 수정 결과)
class AttendanceDetail(AttendanceWithSubject):
    student: Optional[Student] = None
