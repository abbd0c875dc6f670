from __future__ import annotations

import logging
from typing import Optional

from services.attendance_rules import AttendancePatch, AttendanceRules
from services.attendance_store import AttendanceStore
from services.exceptions import AttendanceError, NotFound

logger = logging.getLogger(__name__)


class AttendanceService:
    """규칙 검사를 통과한 경우에만 저장소에 쓰기"""

    def __init__(
        self,
        store: AttendanceStore,
        rules: Optional[AttendanceRules] = None,
        *,
        daily_limit: int = 4,
        timezone: str = "UTC",
    ):
        self._store = store
        self._rules = rules or AttendanceRules(store, daily_limit=daily_limit, timezone=timezone)

    def create(self, *, student_id, subject_id, date, status):
        try:
            fields = self._rules.check_create(student_id, subject_id, date, status)
        except AttendanceError as e:
            logger.info(f"Attendance create rejected: {e.code} ({e.message})")
            raise

        record = self._store.create(fields)
        logger.info(
            f"Attendance created: id={record.id} student={fields.student_id} "
            f"subject={fields.subject_id} date={fields.date.isoformat()} status={fields.status}"
        )
        return record

    def update(self, record_id: int, patch: AttendancePatch):
        try:
            fields = self._rules.check_update(record_id, patch)
        except AttendanceError as e:
            logger.info(f"Attendance update rejected: id={record_id} {e.code} ({e.message})")
            raise

        record = self._store.update(record_id, fields)
        logger.info(f"Attendance updated: id={record_id}")
        return record

    def delete(self, record_id: int) -> None:
        if self._store.get(record_id) is None:
            raise NotFound("Record not found")
        self._store.delete(record_id)
        logger.info(f"Attendance deleted: id={record_id}")
