"""
services/exceptions.py

- 출결/명단 서비스에서 발생하는 도메인 에러 모음
- 각 에러는 HTTP 상태코드와 에러 코드를 함께 가지고 있어
  middlewares/error_handler.py에서 공통 ErrorResponse 형식으로 변환됨
"""


class AttendanceError(Exception):
    """도메인 에러 공통 베이스"""
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(AttendanceError):
    code = "MISSING_FIELD"

    def __init__(self, message: str = "Missing fields", fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class InvalidField(AttendanceError):
    code = "INVALID_FIELD"


class LimitExceeded(AttendanceError):
    code = "LIMIT_EXCEEDED"


class DuplicateRecord(AttendanceError):
    code = "DUPLICATE_RECORD"


class NotFound(AttendanceError):
    status_code = 404
    code = "NOT_FOUND"


class StoreFailure(AttendanceError):
    """DB 계층 오류 (요청 단위로만 실패, 자동 재시도 없음)"""
    status_code = 500
    code = "STORE_FAILURE"

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
