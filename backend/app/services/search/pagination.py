# app/services/search/pagination.py
from typing import Tuple


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """(page, limit) → (skip, take). 마지막 페이지 너머도 허용 (빈 결과)"""
    return page * limit, limit


def total_pages(total_count: int, limit: int) -> int:
    # ceil(total / limit), 0건이면 0페이지
    if total_count <= 0:
        return 0
    return -(-total_count // limit)
