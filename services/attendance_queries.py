"""
services/attendance_queries.py

- 출결 목록 조회 + 페이지네이션 공용 계산
- 정렬은 항상 결정적: 같은 날짜면 id로 한 번 더 정렬해
  쓰기가 없는 한 같은 페이지 요청은 같은 결과를 돌려줌
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from math import ceil
from typing import Any, List, Optional, Sequence, Tuple

from services.attendance_store import AttendanceFilter, AttendanceStore

DEFAULT_PAGE_SIZE = 6
MAX_PAGE = 1_000_000
MAX_PAGE_SIZE = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d{1,18})")  # 18자리면 상한 비교에 충분


@dataclass(frozen=True)
class Page:
    items: List[Any]
    total: int
    page: int
    limit: int
    total_pages: int


def _to_positive_int(value, maximum: int) -> Optional[int]:
    """앞쪽 정수 부분만 읽음 ("3abc" → 3, "2.5" → 2). 0 이하/숫자 아님은 None, 상한 초과는 상한"""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    number = int(match.group(1))
    if number <= 0:
        return None
    return min(number, maximum)


def normalize_paging(page, limit, default_limit: int = DEFAULT_PAGE_SIZE) -> Tuple[int, int]:
    """page는 1, limit은 default_limit로 보정 (없거나 0 이하일 때)"""
    return (
        _to_positive_int(page, MAX_PAGE) or 1,
        _to_positive_int(limit, MAX_PAGE_SIZE) or default_limit,
    )


def count_pages(total: int, limit: int) -> int:
    # total=21, limit=6 → 4
    return ceil(total / limit)


def make_page(items, total: int, page: int, limit: int) -> Page:
    return Page(
        items=list(items),
        total=total,
        page=page,
        limit=limit,
        total_pages=count_pages(total, limit),
    )


class AttendanceQueries:
    def __init__(self, store: AttendanceStore, *, default_limit: int = DEFAULT_PAGE_SIZE):
        self._store = store
        self._default_limit = default_limit

    def list_by_student(self, student_id: int) -> Sequence[Any]:
        """학생 한 명의 전체 기록 (최근 날짜부터)"""
        return self._store.find_many(AttendanceFilter(student_id=student_id))

    def list_all(self, page=None, limit=None) -> Page:
        page, limit = normalize_paging(page, limit, self._default_limit)
        skip = (page - 1) * limit
        everything = AttendanceFilter()

        records = self._store.find_many(everything, skip=skip, take=limit)
        return make_page(records, self._store.count(everything), page, limit)
