from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base

ROLE_ADMIN = "ADMIN"
ROLE_STUDENT = "STUDENT"


class User(Base):
    __tablename__ = "users"  # 로그인 계정 테이블

    id = Column(Integer, primary_key=True, index=True)               # 계정 고유 ID (Primary Key)
    email = Column(String(255), unique=True, nullable=False)         # 로그인 이메일
    password = Column(String(255), nullable=False)                   # bcrypt 해시
    role = Column(String(20), nullable=False, default=ROLE_STUDENT)  # 권한 (ADMIN, STUDENT)

    student = relationship("Student", back_populates="user", uselist=False)
