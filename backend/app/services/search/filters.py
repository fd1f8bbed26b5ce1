# app/services/search/filters.py
from __future__ import annotations
from typing import Any, Dict, List, Optional
import re

from app.models.schemas import SearchQuery

# -----------------------------------------------------------------------------
# 검색 조건 → Mongo 필터 문서
# - 값이 있는 필터만 골라 $and 로 묶는다 (없으면 {} = 전체 매치)
# - 공백 문자열은 "필터 없음"으로 정규화
# - 사용자 입력은 정규식 이스케이프 → 잘못된 패턴이어도 예외 없음
# - 요청마다 새 리스트로 조립 (공유 빌더 없음)
# -----------------------------------------------------------------------------

def _clean(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None

def _contains(text: str) -> Dict[str, str]:
    """대소문자 무시 부분일치"""
    return {"$regex": re.escape(text), "$options": "i"}

def _any_token(text: str) -> Dict[str, str]:
    """공백 단위 토큰 중 하나라도 등장하면 매치 (OR 정규식)"""
    toks = [re.escape(t) for t in text.split() if t]
    return {"$regex": "|".join(toks), "$options": "i"}

def build_search_filter(query: SearchQuery) -> Dict[str, Any]:
    clauses: List[Dict[str, Any]] = []

    text = _clean(query.searchText)
    if text:
        rx = _any_token(text)
        clauses.append({"$or": [{"title": rx}, {"ingredientNames": rx}]})

    ingredient = _clean(query.ingredient)
    if ingredient:
        clauses.append({"ingredientNames": _contains(ingredient)})

    cuisine = _clean(query.cuisine)
    if cuisine:
        clauses.append({"cuisine": _contains(cuisine)})

    diet = _clean(query.dietaryPreference)
    if diet:
        # 배열 필드에 대한 등호 = 원소 포함 여부
        clauses.append({"dietaryPreferences": diet})

    # 0 이하는 상한으로 보지 않는다
    if query.maxPrepTime is not None and query.maxPrepTime > 0:
        clauses.append({"prepTime": {"$lte": query.maxPrepTime}})

    if not clauses:
        return {}
    return {"$and": clauses}
