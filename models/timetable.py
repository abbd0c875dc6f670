from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Timetable(Base):
    __tablename__ = "timetable"  # 요일별 시간표

    id = Column(Integer, primary_key=True, index=True)                    # 시간표 고유 ID
    day_of_week = Column(Integer, nullable=False, index=True)            # 요일 (0=일요일 ~ 6=토요일)
    start_time = Column(String(20), nullable=False)                      # 시작 시간 (예: 9:00 AM)
    end_time = Column(String(20), nullable=False)                        # 종료 시간 (예: 10:00 AM)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)  # 과목 ID
    room = Column(String(50))                                            # 강의실

    subject = relationship("Subject")
