"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 에러 응답 표준: ErrorDetail, ErrorResponse
  2) 페이지네이션 메타: PaginationMeta, make_pagination()
  3) 목록 응답: AttendancePage, StudentPage
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from schemas.attendance import AttendanceDetail
from schemas.students import StudentWithUser


# =========================================================
# 1) 에러 응답 표준
# =========================================================

class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: str = Field(..., description="에러 식별 코드 (예: LIMIT_EXCEEDED, NOT_FOUND)")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")

class ErrorResponse(BaseModel):
    """
    전역 에러 핸들러에서 내려주는 표준 에러 응답
    - middlewares/error_handler.py에서 이 스키마로 리턴
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )
    latency_ms: Optional[int] = Field(
        default=None, ge=0, description="요청 처리에 걸린 시간(ms)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) 페이지네이션 메타
# =========================================================

class PaginationMeta(BaseModel):
    """
    목록 응답에 포함시키는 메타 정보
    - total: 전체 개수
    - page/limit: 현재 페이지와 크기
    - totalPages: ceil(total / limit), total이 0이면 0
    """
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0, alias="totalPages")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def make_pagination(page) -> PaginationMeta:
    """services.attendance_queries.Page → 응답 메타"""
    return PaginationMeta(
        total=page.total,
        page=page.page,
        limit=page.limit,
        total_pages=page.total_pages,
    )


# =========================================================
# 3) 목록 응답
# =========================================================

class AttendancePage(BaseModel):
    records: List[AttendanceDetail]
    pagination: PaginationMeta

class StudentPage(BaseModel):
    students: List[StudentWithUser]
    pagination: PaginationMeta


# =========================================================
# 4) 라우터 공용 에러 응답 문서 (OpenAPI)
# =========================================================

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "필수값 누락 / 형식 오류 / 하루 개수 초과 / 중복"},
    404: {"model": ErrorResponse, "description": "대상 없음"},
    500: {"model": ErrorResponse, "description": "저장소 오류"},
}
