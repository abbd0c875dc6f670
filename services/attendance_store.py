"""
services/attendance_store.py

- 출결 테이블 접근 계층 (Attendance Store)
- 서비스 계층은 AttendanceStore 프로토콜에만 의존하고,
  실제 구현(SqlAlchemyAttendanceStore)은 요청 단위 Session을 주입받아 생성됨
- 테스트에서는 메모리 기반 가짜 저장소로 교체 가능
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.attendance import Attendance as AttendanceModel
from services.exceptions import NotFound, StoreFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceFilter:
    """count/find 조건. None인 항목은 조건에서 제외"""
    id: Optional[int] = None
    student_id: Optional[int] = None
    subject_id: Optional[int] = None
    date: Optional[datetime] = None          # 정확한 시각 일치
    date_from: Optional[datetime] = None     # 이상 (gte)
    date_to: Optional[datetime] = None       # 이하 (lte)
    exclude_id: Optional[int] = None         # NOT {id}


@dataclass(frozen=True)
class AttendanceFields:
    """저장할 출결 기록 한 건의 값 (검증 완료 상태)"""
    student_id: int
    subject_id: int
    date: datetime
    status: str


class AttendanceStore(Protocol):
    def count(self, where: AttendanceFilter) -> int:
        raise NotImplementedError

    def find_many(
        self,
        where: AttendanceFilter,
        *,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> Sequence[AttendanceModel]:
        """date 내림차순, 같은 시각이면 id 내림차순"""
        raise NotImplementedError

    def find_first(self, where: AttendanceFilter) -> Optional[AttendanceModel]:
        raise NotImplementedError

    def get(self, record_id: int) -> Optional[AttendanceModel]:
        raise NotImplementedError

    def create(self, fields: AttendanceFields) -> AttendanceModel:
        raise NotImplementedError

    def update(self, record_id: int, fields: AttendanceFields) -> AttendanceModel:
        raise NotImplementedError

    def delete(self, record_id: int) -> None:
        raise NotImplementedError


class SqlAlchemyAttendanceStore:
    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception(f"Attendance store {action} failed")
            raise StoreFailure() from e

    def _query(self, where: AttendanceFilter):
        q = self._db.query(AttendanceModel)
        if where.id is not None:
            q = q.filter(AttendanceModel.id == where.id)
        if where.student_id is not None:
            q = q.filter(AttendanceModel.student_id == where.student_id)
        if where.subject_id is not None:
            q = q.filter(AttendanceModel.subject_id == where.subject_id)
        if where.date is not None:
            q = q.filter(AttendanceModel.date == where.date)
        if where.date_from is not None:
            q = q.filter(AttendanceModel.date >= where.date_from)
        if where.date_to is not None:
            q = q.filter(AttendanceModel.date <= where.date_to)
        if where.exclude_id is not None:
            q = q.filter(AttendanceModel.id != where.exclude_id)
        return q

    def count(self, where: AttendanceFilter) -> int:
        with self._guard("count"):
            return self._query(where).count()

    def find_many(self, where, *, skip=0, take=None):
        with self._guard("find_many"):
            q = (
                self._query(where)
                .options(joinedload(AttendanceModel.student), joinedload(AttendanceModel.subject))
                .order_by(AttendanceModel.date.desc(), AttendanceModel.id.desc())
                .offset(skip)
            )
            if take is not None:
                q = q.limit(take)
            return q.all()

    def find_first(self, where):
        with self._guard("find_first"):
            return self._query(where).order_by(AttendanceModel.id).first()

    def get(self, record_id):
        with self._guard("get"):
            return (
                self._db.query(AttendanceModel)
                .options(joinedload(AttendanceModel.student), joinedload(AttendanceModel.subject))
                .filter(AttendanceModel.id == record_id)
                .first()
            )

    def create(self, fields):
        with self._guard("create"):
            record = AttendanceModel(**asdict(fields))
            self._db.add(record)
            self._db.commit()
            self._db.refresh(record)
            return record

    def update(self, record_id, fields):
        with self._guard("update"):
            record = self._db.get(AttendanceModel, record_id)
            if record is None:
                raise NotFound("Record not found")
            for key, value in asdict(fields).items():
                setattr(record, key, value)
            self._db.commit()
            # student/subject 관계를 새 값 기준으로 다시 로드
            self._db.refresh(record)
            return record

    def delete(self, record_id):
        with self._guard("delete"):
            self._db.query(AttendanceModel).filter(AttendanceModel.id == record_id).delete()
            self._db.commit()
