# app/services/search/sorting.py
# 정렬 키 해석. 알 수 없는 값은 최신순으로 폴백 (에러 아님)
from typing import List, Optional, Tuple

from pymongo import DESCENDING

DEFAULT_SORT_FIELD = "createdAt"

# "relevance"는 텍스트 점수 정렬이 아니라 최신순 별칭
SORT_FIELDS = {
    "preptime": "prepTime",
    "favorites": "favoritesCount",
    "createdat": "createdAt",
    "relevance": "createdAt",
}

def resolve_sort(sort_by: Optional[str]) -> Tuple[str, int]:
    key = (sort_by or "").strip().lower()
    return SORT_FIELDS.get(key, DEFAULT_SORT_FIELD), DESCENDING

def sort_spec(sort_by: Optional[str]) -> List[Tuple[str, int]]:
    # _id 보조키로 전체 순서 고정 → 페이지 사이 중복/누락 없음
    field, direction = resolve_sort(sort_by)
    return [(field, direction), ("_id", direction)]
