import random
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from database.db import SessionLocal, init_db
from models.attendance import Attendance as AttendanceModel, STATUS_PRESENT, STATUS_ABSENT
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.timetable import Timetable as TimetableModel
from models.users import User as UserModel, ROLE_STUDENT
from utils.security import hash_password

SUBJECT_NAMES = ["ADA", "AP", "DBMS", "MATHS"]   # ✅ 기본 과목
STUDENT_COUNT = 10
ATTENDANCE_DAYS = 20
DEFAULT_PASSWORD = "password123"

# ✅ 월~금 시간표 (요일, 시작, 종료, 과목 인덱스, 강의실)
TIMETABLE = [
    (1, "9:00 AM", "10:00 AM", 0, "Room 101"),
    (1, "10:15 AM", "11:15 AM", 1, "Room 102"),
    (1, "11:30 AM", "12:30 PM", 2, "Room 103"),
    (2, "9:00 AM", "10:00 AM", 1, "Room 102"),
    (2, "10:15 AM", "11:15 AM", 3, "Room 104"),
    (2, "11:30 AM", "12:30 PM", 0, "Room 101"),
    (3, "9:00 AM", "10:00 AM", 2, "Room 103"),
    (3, "10:15 AM", "11:15 AM", 0, "Room 101"),
    (3, "11:30 AM", "12:30 PM", 1, "Room 102"),
    (3, "2:00 PM", "3:00 PM", 3, "Room 104"),
    (4, "9:00 AM", "10:00 AM", 3, "Room 104"),
    (4, "10:15 AM", "11:15 AM", 2, "Room 103"),
    (4, "11:30 AM", "12:30 PM", 0, "Room 101"),
    (5, "9:00 AM", "10:00 AM", 0, "Room 101"),
    (5, "10:15 AM", "11:15 AM", 1, "Room 102"),
    (5, "11:30 AM", "12:30 PM", 3, "Room 104"),
]


def seed():
    init_db()
    db: Session = SessionLocal()

    # 0. 기존 데이터 정리
    print("🧹 기존 데이터 삭제 중...")
    for model in (AttendanceModel, TimetableModel, StudentModel, UserModel, SubjectModel):
        db.query(model).delete()
    db.commit()

    # 1. 과목
    subjects = [SubjectModel(name=name, code=name) for name in SUBJECT_NAMES]
    db.add_all(subjects)
    db.flush()
    print(f"✅ 과목 생성: {SUBJECT_NAMES}")

    # 2. 학생 10명 (공통 비밀번호)
    password_hash = hash_password(DEFAULT_PASSWORD)
    students = []
    for i in range(1, STUDENT_COUNT + 1):
        email = f"student{i}@schoolflow.com"
        user = UserModel(email=email, password=password_hash, role=ROLE_STUDENT)
        db.add(user)
        db.flush()
        student = StudentModel(
            name=f"Student {i}",
            roll_number=f"ROLL{100 + i}",
            email=email,
            user_id=user.id,
        )
        db.add(student)
        students.append(student)
    db.flush()
    print(f"✅ 학생 {len(students)}명 생성")

    # 3. 최근 20일 출결 (출석 확률 80%)
    now = datetime.now().replace(microsecond=0)
    records = []
    for day in range(ATTENDANCE_DAYS):
        moment = now - timedelta(days=day)
        for student in students:
            for subject in subjects:
                status = STATUS_PRESENT if random.random() > 0.2 else STATUS_ABSENT
                records.append(AttendanceModel(
                    student_id=student.id,
                    subject_id=subject.id,
                    date=moment,
                    status=status,
                ))
    db.add_all(records)
    print(f"✅ 출결 기록 {len(records)}건 생성")

    # 4. 시간표
    db.add_all([
        TimetableModel(
            day_of_week=day,
            start_time=start,
            end_time=end,
            subject_id=subjects[index].id,
            room=room,
        )
        for day, start, end, index, room in TIMETABLE
    ])

    db.commit()
    db.close()
    print(f"✅ 시간표 {len(TIMETABLE)}건 생성")
    print(f"학생 기본 비밀번호: {DEFAULT_PASSWORD}")

if __name__ == "__main__":
    seed()
