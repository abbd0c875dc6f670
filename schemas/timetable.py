from pydantic import BaseModel, ConfigDict
from typing import Optional

from schemas.subjects import Subject

class TimetableEntry(BaseModel):
    id: int
    day_of_week: int                          # 0=일요일 ~ 6=토요일
    start_time: str
    end_time: str
    subject_id: int
    room: Optional[str] = None
    subject: Optional[Subject] = None

    model_config = ConfigDict(from_attributes=True)
