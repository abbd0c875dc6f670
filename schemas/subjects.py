from pydantic import BaseModel, ConfigDict

# ✅ 출력용: 과목 목록/출결 기록 안에 포함되는 과목 정보
class Subject(BaseModel):
    id: int                                  # 고유 과목 ID
    name: str                                # 과목 이름
    code: str                                # 과목 코드

    model_config = ConfigDict(from_attributes=True)
