"""
services/roster_service.py

- 학생 명단(계정 포함) 등록/수정/삭제, 과목 목록, 학생 본인 프로필/시간표 조회
- 출결 규칙과 무관한 단순 CRUD 계층
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.attendance import Attendance as AttendanceModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.timetable import Timetable as TimetableModel
from models.users import User as UserModel, ROLE_STUDENT
from services.attendance_queries import DEFAULT_PAGE_SIZE, Page, make_page, normalize_paging
from services.exceptions import AttendanceError, DuplicateRecord, MissingField, NotFound, StoreFailure
from utils.security import generate_password, hash_password

logger = logging.getLogger(__name__)


def js_day_of_week(moment: datetime) -> int:
    """0=일요일 ~ 6=토요일 (시간표 저장 규칙)"""
    return (moment.weekday() + 1) % 7


def _clock_key(value: str):
    # "9:00 AM" < "10:15 AM" 순서가 되도록 시각으로 비교
    for fmt in ("%I:%M %p", "%H:%M"):
        try:
            return (0, datetime.strptime(value.strip(), fmt).time(), value)
        except ValueError:
            continue
    return (1, None, value)


class RosterService:
    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def _transaction(self, action: str):
        try:
            yield
            self._db.commit()
        except AttendanceError:
            self._db.rollback()
            raise
        except IntegrityError as e:
            self._db.rollback()
            logger.warning(f"Roster {action} violated a unique constraint: {e.orig}")
            raise DuplicateRecord("Email or roll number already in use") from e
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception(f"Roster {action} failed")
            raise StoreFailure() from e

    # ==========================================================
    # 학생 명단
    # ==========================================================
    def create_student(self, *, name, email, roll_number) -> Tuple[StudentModel, str]:
        """학생 + 로그인 계정 생성. 임시 비밀번호는 응답으로 한 번만 전달"""
        if not name or not email or not roll_number:
            raise MissingField("Missing required fields")

        raw_password = generate_password()
        with self._transaction("create"):
            if self._db.query(UserModel).filter(UserModel.email == email).first():
                raise DuplicateRecord("Email already in use")
            if self._db.query(StudentModel).filter(StudentModel.roll_number == roll_number).first():
                raise DuplicateRecord("Roll number already in use")

            user = UserModel(email=email, password=hash_password(raw_password), role=ROLE_STUDENT)
            self._db.add(user)
            self._db.flush()

            student = StudentModel(name=name, roll_number=roll_number, email=email, user_id=user.id)
            self._db.add(student)

        self._db.refresh(student)
        logger.info(f"Student created: id={student.id} roll_number={roll_number}")
        return student, raw_password

    def update_student(self, student_id: int, *, name=None, email=None, roll_number=None) -> StudentModel:
        with self._transaction("update"):
            student = self._db.get(StudentModel, student_id)
            if not student:
                raise NotFound("Student not found")

            if email and email != student.email:
                taken = self._db.query(UserModel).filter(UserModel.email == email).first()
                if taken and taken.id != student.user_id:
                    raise DuplicateRecord("Email already in use")

            if roll_number and roll_number != student.roll_number:
                taken = (
                    self._db.query(StudentModel)
                    .filter(StudentModel.roll_number == roll_number)
                    .first()
                )
                if taken and taken.id != student.id:
                    raise DuplicateRecord("Roll number already in use")

            if name:
                student.name = name
            if roll_number:
                student.roll_number = roll_number
            if email and email != student.email:
                student.email = email
                # 로그인 이메일도 함께 변경
                student.user.email = email

        self._db.refresh(student)
        logger.info(f"Student updated: id={student_id}")
        return student

    def delete_student(self, student_id: int) -> None:
        """학생 삭제 시 출결 기록과 로그인 계정도 함께 삭제"""
        with self._transaction("delete"):
            student = self._db.get(StudentModel, student_id)
            if not student:
                raise NotFound("Student not found")

            user_id = student.user_id
            self._db.query(AttendanceModel).filter(AttendanceModel.student_id == student_id).delete()
            self._db.delete(student)
            self._db.flush()
            self._db.query(UserModel).filter(UserModel.id == user_id).delete()

        logger.info(f"Student deleted: id={student_id}")

    # ==========================================================
    # 조회 (과목 / 학생 본인)
    # ==========================================================
    def list_students(self, page=None, limit=None, *, default_limit: int = DEFAULT_PAGE_SIZE) -> Page:
        """학생 명단 (이름 오름차순, 같은 이름은 id 순, 계정 포함)"""
        page, limit = normalize_paging(page, limit, default_limit)
        try:
            students = (
                self._db.query(StudentModel)
                .options(joinedload(StudentModel.user))
                .order_by(StudentModel.name.asc(), StudentModel.id.asc())
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
            total = self._db.query(StudentModel).count()
        except SQLAlchemyError as e:
            logger.exception("Student roster query failed")
            raise StoreFailure() from e
        return make_page(students, total, page, limit)

    def list_subjects(self) -> List[SubjectModel]:
        try:
            return self._db.query(SubjectModel).order_by(SubjectModel.name).all()
        except SQLAlchemyError as e:
            logger.exception("Subject list failed")
            raise StoreFailure() from e

    def get_student_for_user(self, user_id) -> StudentModel:
        try:
            student = (
                self._db.query(StudentModel)
                .filter(StudentModel.user_id == user_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.exception("Student profile lookup failed")
            raise StoreFailure() from e
        if not student:
            raise NotFound("Student profile not found")
        return student

    def timetable_for(self, moment: Optional[datetime] = None) -> List[TimetableModel]:
        """해당 날짜 요일의 시간표 (시작 시각 순)"""
        day = js_day_of_week(moment or datetime.now())
        try:
            entries = (
                self._db.query(TimetableModel)
                .options(joinedload(TimetableModel.subject))
                .filter(TimetableModel.day_of_week == day)
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Timetable lookup failed")
            raise StoreFailure() from e
        return sorted(entries, key=lambda e: (_clock_key(e.start_time), e.id))
