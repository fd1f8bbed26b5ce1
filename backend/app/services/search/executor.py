# app/services/search/executor.py
from __future__ import annotations
from typing import Any, Dict, List, Mapping
import logging

from pymongo.errors import PyMongoError

from app.core.errors import SearchUnavailable
from app.db.recipe_store import RecipeStore
from app.models.schemas import RecipeSearchResult, SearchQuery, SearchResponse
from app.services.search.filters import build_search_filter
from app.services.search.pagination import page_window, total_pages
from app.services.search.sorting import sort_spec

log = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# 고급 검색 실행기
# 1) 필터 조립  2) 정렬/페이지 창 계산  3) 페이지 조회 + 작성자 조인
# 4) 목록용 필드만 투영  5) 같은 필터로 전체 건수  6) 총 페이지
# - 읽기 전용. 건수 조회와 페이지 조회는 별도 쿼리라 동시 쓰기 중엔
#   totalCount 가 페이지와 약간 어긋날 수 있다 (트랜잭션 보장 없음)
# - 저장소 장애는 SearchUnavailable 하나로 올린다 (부분 결과 없음)
# -----------------------------------------------------------------------------

def author_name(doc: Mapping[str, Any]) -> str | None:
    info = doc.get("authorInfo") or []
    if not info:
        return None
    return info[0].get("username")

def to_search_row(doc: Mapping[str, Any]) -> RecipeSearchResult:
    return RecipeSearchResult(
        id=str(doc.get("_id") or ""),
        title=doc.get("title") or "",
        image=doc.get("image"),
        cuisine=doc.get("cuisine"),
        prepTime=int(doc.get("prepTime") or 0),
        ingredientNames=[str(x) for x in (doc.get("ingredientNames") or [])],
        dietaryPreferences=[str(x) for x in (doc.get("dietaryPreferences") or [])],
        favoritesCount=int(doc.get("favoritesCount") or 0),
        authorName=author_name(doc),
    )

class RecipeSearch:
    def __init__(self, store: RecipeStore):
        self.store = store

    async def search(self, query: SearchQuery) -> SearchResponse:
        predicate = build_search_filter(query)
        sort = sort_spec(query.sortBy)
        skip, take = page_window(query.page, query.limit)
        log.debug("search predicate=%s sort=%s skip=%d take=%d", predicate, sort, skip, take)

        try:
            docs: List[Dict[str, Any]] = await self.store.find(predicate, sort, skip, take)
            total = await self.store.count(predicate)
        except PyMongoError as e:
            log.exception("recipe search failed")
            raise SearchUnavailable("search unavailable") from e

        return SearchResponse(
            recipes=[to_search_row(d) for d in docs],
            totalCount=total,
            currentPage=query.page,
            totalPages=total_pages(total, query.limit),
        )
