from pydantic import BaseModel, ConfigDict
from typing import Optional

# ✅ 입력용 (POST) - 누락 여부는 서비스에서 MissingField로 처리
class StudentCreate(BaseModel):
    name: Optional[str] = None               # 학생 이름
    email: Optional[str] = None              # 이메일 (로그인 ID)
    roll_number: Optional[str] = None        # 학번

# ✅ 수정용 (PUT) - 보낸 항목만 변경
class StudentUpdate(StudentCreate):
    pass

# ✅ 학생에 연결된 로그인 계정 (비밀번호 해시는 제외)
class UserAccount(BaseModel):
    id: int
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)

# ✅ 출력용
class Student(BaseModel):
    id: int
    name: str
    roll_number: str
    email: str
    user_id: int

    model_config = ConfigDict(from_attributes=True)

# ✅ 명단 조회용 (계정 포함)
class StudentWithUser(Student):
    user: Optional[UserAccount] = None

# ✅ 등록 응답 (임시 비밀번호 1회 노출)
class StudentCreated(BaseModel):
    student: Student
    password: str
