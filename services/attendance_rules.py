"""
services/attendance_rules.py

출결 기록 생성/수정 가능 여부를 판단하는 규칙 모음.

- (학생, 과목, 하루)당 기록은 최대 daily_limit(기본 4)건
- 수정 시에는 수정 대상 기록을 제외하고 개수를 셈
- 수정 결과가 다른 기록과 (학생, 과목, 시각)까지 완전히 같으면 거부
- 개수 비교는 하루 단위, 중복 비교는 저장된 시각 단위 (의도된 차이)

검사는 항상 저장 직전에 저장소에서 새로 조회한 값으로 수행하며 캐시하지 않음.
검사와 쓰기 사이의 경쟁 상태(동시 생성 시 일시적으로 5건)는 허용된 트레이드오프임.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Tuple
from zoneinfo import ZoneInfo

from models.attendance import ATTENDANCE_STATUSES
from services.attendance_store import AttendanceFields, AttendanceFilter, AttendanceStore
from services.exceptions import (
    DuplicateRecord,
    InvalidField,
    LimitExceeded,
    MissingField,
    NotFound,
)

DEFAULT_DAILY_LIMIT = 4

LIMIT_MESSAGE = "Maximum {limit} attendance records allowed per subject per day"
DUPLICATE_MESSAGE = "An attendance record already exists for this student, subject, and date"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_instant(value: Any, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    입력값을 로컬 달력 기준의 naive datetime으로 변환
    - tz 정보가 있는 값은 tz로 변환 후 tzinfo 제거
    - 날짜만 주어지면 그날 00:00
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidField(f"Invalid date: {value}")
    else:
        raise InvalidField(f"Invalid date: {value!r}")

    if moment.tzinfo is not None:
        moment = moment.astimezone(tz or ZoneInfo("UTC")).replace(tzinfo=None)
    # 저장 컬럼 정밀도(밀리초)에 맞춰 버림 → 비교값과 저장값이 항상 같음
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def normalize_status(value: Any) -> str:
    status = str(value).strip().upper()
    if status not in ATTENDANCE_STATUSES:
        raise InvalidField(
            f"Invalid status: {value}. Expected one of {', '.join(ATTENDANCE_STATUSES)}"
        )
    return status


def day_window(moment: datetime) -> Tuple[datetime, datetime]:
    """해당 시각이 속한 날의 [00:00:00.000, 23:59:59.999]"""
    start = datetime.combine(moment.date(), time.min)
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end


@dataclass(frozen=True)
class AttendancePatch:
    """부분 수정 요청. None/빈 값은 기존 값 유지"""
    student_id: Optional[int] = None
    subject_id: Optional[int] = None
    date: Any = None
    status: Optional[str] = None


def merge_attendance(existing, patch: AttendancePatch, tz: Optional[ZoneInfo] = None) -> AttendanceFields:
    """기존 기록 + 수정 요청 → 실제로 저장될 값 (기존 객체는 건드리지 않음)"""
    return AttendanceFields(
        student_id=existing.student_id if _is_blank(patch.student_id) else patch.student_id,
        subject_id=existing.subject_id if _is_blank(patch.subject_id) else patch.subject_id,
        date=existing.date if _is_blank(patch.date) else parse_instant(patch.date, tz),
        status=existing.status if _is_blank(patch.status) else normalize_status(patch.status),
    )


class AttendanceRules:
    def __init__(
        self,
        store: AttendanceStore,
        *,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        timezone: str = "UTC",
    ):
        self._store = store
        self._daily_limit = int(daily_limit)
        self._tz = ZoneInfo(timezone)

    def _check_daily_limit(self, fields: AttendanceFields, *, exclude_id: Optional[int] = None) -> None:
        start, end = day_window(fields.date)
        count = self._store.count(
            AttendanceFilter(
                student_id=fields.student_id,
                subject_id=fields.subject_id,
                date_from=start,
                date_to=end,
                exclude_id=exclude_id,
            )
        )
        if count >= self._daily_limit:
            raise LimitExceeded(LIMIT_MESSAGE.format(limit=self._daily_limit))

    def check_create(self, student_id, subject_id, date, status) -> AttendanceFields:
        missing = [
            name
            for name, value in (
                ("student_id", student_id),
                ("subject_id", subject_id),
                ("date", date),
                ("status", status),
            )
            if _is_blank(value)
        ]
        if missing:
            raise MissingField("Missing fields", fields=missing)

        fields = AttendanceFields(
            student_id=student_id,
            subject_id=subject_id,
            date=parse_instant(date, self._tz),
            status=normalize_status(status),
        )
        self._check_daily_limit(fields)
        return fields

    def check_update(self, record_id: int, patch: AttendancePatch) -> AttendanceFields:
        existing = self._store.get(record_id)
        if existing is None:
            raise NotFound("Record not found")

        fields = merge_attendance(existing, patch, self._tz)
        self._check_daily_limit(fields, exclude_id=record_id)

        duplicate = self._store.find_first(
            AttendanceFilter(
                student_id=fields.student_id,
                subject_id=fields.subject_id,
                date=fields.date,
                exclude_id=record_id,
            )
        )
        if duplicate is not None:
            raise DuplicateRecord(DUPLICATE_MESSAGE)
        return fields
