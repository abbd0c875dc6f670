from sqlalchemy.orm import Session
from database.db import SessionLocal
from models.attendance import Attendance as AttendanceModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.users import User as UserModel

def verify():
    db: Session = SessionLocal()
    try:
        print("--- Database Verification ---")
        print(f"Users: {db.query(UserModel).count()}")
        print(f"Students: {db.query(StudentModel).count()}")
        print(f"Subjects: {db.query(SubjectModel).count()}")
        print(f"Attendance Records: {db.query(AttendanceModel).count()}")

        student = db.query(StudentModel).order_by(StudentModel.id).first()
        if student:
            print(f"Sample Student: {student.name} ({student.roll_number}, {student.email}, user={student.user.email})")
    finally:
        db.close()

if __name__ == "__main__":
    verify()
