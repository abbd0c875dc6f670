from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                # 고유 학생 ID (Primary Key)
    name = Column(String(100), nullable=False, index=True)           # 학생 이름 (명단 정렬 기준)
    roll_number = Column(String(50), unique=True, nullable=False)    # 학번
    email = Column(String(255), unique=True, nullable=False)         # 이메일
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                     unique=True, nullable=False)                    # 로그인 계정 (1:1)

    user = relationship("User", back_populates="student")
    attendance = relationship(
        "Attendance",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
