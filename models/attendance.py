from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship
from database.db import Base

STATUS_PRESENT = "PRESENT"
STATUS_ABSENT = "ABSENT"
ATTENDANCE_STATUSES = (STATUS_PRESENT, STATUS_ABSENT)

# MySQL 기본 DATETIME은 초 단위로 반올림 → 밀리초까지 저장
AttendanceDateTime = DateTime().with_variant(mysql.DATETIME(fsp=3), "mysql")


class Attendance(Base):
    __tablename__ = "attendance"  # 출결 기록 테이블
    __table_args__ = (
        # (학생, 과목, 날짜) 범위 조회용
        Index("ix_attendance_student_subject_date", "student_id", "subject_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)                   # 출결 고유 ID (Primary Key)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"),
                        nullable=False, index=True)                      # 학생 ID
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)  # 과목 ID
    date = Column(AttendanceDateTime, nullable=False, index=True)        # 출결 시각 (로컬 달력 기준, 밀리초 단위)
    status = Column(String(20), nullable=False)                          # 출결 상태 (PRESENT, ABSENT)

    student = relationship("Student", back_populates="attendance")
    subject = relationship("Subject")
