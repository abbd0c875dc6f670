import os
from types import SimpleNamespace

# 앱 모듈 임포트 전에 테스트용 설정 주입
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("JWT_SECRET", "schoolflow-test-secret-key-0123456789")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import build_engine, get_db, init_db
from main import app
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.users import User as UserModel, ROLE_ADMIN, ROLE_STUDENT
from services.attendance_store import AttendanceFields
from utils.security import hash_password, sign_token


class InMemoryAttendanceStore:
    """AttendanceStore 프로토콜의 메모리 구현 (규칙/조회 단위 테스트용)"""

    def __init__(self):
        self.rows = {}
        self._next_id = 1
        self.writes = 0

    def _matches(self, row, where):
        if where.id is not None and row.id != where.id:
            return False
        if where.student_id is not None and row.student_id != where.student_id:
            return False
        if where.subject_id is not None and row.subject_id != where.subject_id:
            return False
        if where.date is not None and row.date != where.date:
            return False
        if where.date_from is not None and row.date < where.date_from:
            return False
        if where.date_to is not None and row.date > where.date_to:
            return False
        if where.exclude_id is not None and row.id == where.exclude_id:
            return False
        return True

    def count(self, where):
        return sum(1 for row in self.rows.values() if self._matches(row, where))

    def find_many(self, where, *, skip=0, take=None):
        rows = [row for row in self.rows.values() if self._matches(row, where)]
        rows.sort(key=lambda r: (r.date, r.id), reverse=True)
        end = None if take is None else skip + take
        return rows[skip:end]

    def find_first(self, where):
        rows = sorted(
            (row for row in self.rows.values() if self._matches(row, where)),
            key=lambda r: r.id,
        )
        return rows[0] if rows else None

    def get(self, record_id):
        return self.rows.get(record_id)

    def create(self, fields: AttendanceFields):
        row = SimpleNamespace(id=self._next_id, **vars(fields))
        self.rows[row.id] = row
        self._next_id += 1
        self.writes += 1
        return row

    def update(self, record_id, fields: AttendanceFields):
        row = SimpleNamespace(id=record_id, **vars(fields))
        self.rows[record_id] = row
        self.writes += 1
        return row

    def delete(self, record_id):
        self.rows.pop(record_id, None)
        self.writes += 1

    def add(self, student_id, subject_id, date, status="PRESENT"):
        return self.create(AttendanceFields(student_id, subject_id, date, status))


@pytest.fixture
def fake_store():
    return InMemoryAttendanceStore()


# ==========================================================
# SQLite 메모리 DB + TestClient
# ==========================================================
@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {sign_token({'user_id': 'admin', 'role': ROLE_ADMIN})}"}


@pytest.fixture
def school(db):
    """과목 2개 + 학생 2명 (학생1 비밀번호: password123)"""
    password = hash_password("password123")
    subjects = [SubjectModel(name="DBMS", code="DBMS"), SubjectModel(name="MATHS", code="MATHS")]
    db.add_all(subjects)

    users = [
        UserModel(email="student1@schoolflow.com", password=password, role=ROLE_STUDENT),
        UserModel(email="student2@schoolflow.com", password=password, role=ROLE_STUDENT),
    ]
    db.add_all(users)
    db.flush()

    students = [
        StudentModel(name="Student 1", roll_number="ROLL101", email=users[0].email, user_id=users[0].id),
        StudentModel(name="Student 2", roll_number="ROLL102", email=users[1].email, user_id=users[1].id),
    ]
    db.add_all(students)
    db.commit()
    return SimpleNamespace(
        subjects=[s.id for s in subjects],
        students=[s.id for s in students],
        users=[u.id for u in users],
    )


@pytest.fixture
def student_headers(school):
    token = sign_token({"user_id": school.users[0], "role": ROLE_STUDENT})
    return {"Authorization": f"Bearer {token}"}
