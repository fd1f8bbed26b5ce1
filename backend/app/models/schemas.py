# app/models/schemas.py
# API 입출력 Pydantic 모델
# 필드명은 프론트와 동일하게 camelCase 유지
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.config import settings


def _dedupe(values: Optional[List[str]]) -> List[str]:
    # 집합 의미의 리스트: 공백 제거 + 순서 유지 중복 제거
    out: List[str] = []
    for v in values or []:
        s = str(v).strip()
        if s and s not in out:
            out.append(s)
    return out


# ------------------------------
# 검색
# ------------------------------

class SearchQuery(BaseModel):
    """
    고급 검색 요청. 모든 필터는 선택이며 없으면 제약 없음.
    요청마다 생성되고 검색 호출이 끝나면 버려진다 (불변).
    """
    model_config = ConfigDict(frozen=True)

    searchText: Optional[str] = None
    ingredient: Optional[str] = None
    cuisine: Optional[str] = None
    dietaryPreference: Optional[str] = None
    maxPrepTime: Optional[int] = None
    sortBy: str = "relevance"
    page: int = Field(default=0, ge=0, description="Page must be 0 or greater")
    limit: int = Field(
        default=settings.SEARCH_DEFAULT_LIMIT,
        ge=1,
        le=settings.SEARCH_MAX_LIMIT,
        description=f"Limit must be between 1 and {settings.SEARCH_MAX_LIMIT}",
    )

    @field_validator("maxPrepTime", mode="before")
    @classmethod
    def _v_max_prep(cls, v):
        # 정수로 안 읽히면 제약 없음 (에러 아님)
        if v is None or isinstance(v, bool):
            return None
        try:
            return int(str(v).strip())
        except ValueError:
            return None


class RecipeSearchResult(BaseModel):
    # 목록 카드용 행. 재료 분량/조리 단계는 상세 화면 전용이라 제외
    id: str
    title: str = ""
    image: Optional[str] = None
    cuisine: Optional[str] = None
    prepTime: int = 0
    ingredientNames: List[str] = Field(default_factory=list)
    dietaryPreferences: List[str] = Field(default_factory=list)
    favoritesCount: int = 0
    authorName: Optional[str] = None


class SearchResponse(BaseModel):
    recipes: List[RecipeSearchResult] = Field(default_factory=list)
    totalCount: int = 0
    currentPage: int = 0
    totalPages: int = 0


# ------------------------------
# 레시피 CRUD
# ------------------------------

class RecipeIn(BaseModel):
    title: str = Field(..., min_length=1)
    image: Optional[str] = None
    cuisine: Optional[str] = None
    prepTime: int = Field(default=0, ge=0, description="Preparation time in minutes")
    ingredientNames: Optional[List[str]] = None   # 없으면 ingredients 키로 채움
    ingredients: Dict[str, int] = Field(default_factory=dict)
    steps: str = ""
    dietaryPreferences: List[str] = Field(default_factory=list)

    @field_validator("dietaryPreferences", mode="before")
    @classmethod
    def _v_prefs(cls, v):
        return _dedupe(v)


class RecipeUpdate(BaseModel):
    # 부분 수정: None 아닌 필드만 반영
    title: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = None
    cuisine: Optional[str] = None
    prepTime: Optional[int] = Field(default=None, ge=0)
    ingredientNames: Optional[List[str]] = None
    ingredients: Optional[Dict[str, int]] = None
    steps: Optional[str] = None
    dietaryPreferences: Optional[List[str]] = None

    @field_validator("dietaryPreferences", mode="before")
    @classmethod
    def _v_prefs(cls, v):
        return None if v is None else _dedupe(v)


class RecipeOut(BaseModel):
    id: str
    title: str
    image: Optional[str] = None
    cuisine: Optional[str] = None
    prepTime: int = 0
    ingredientNames: List[str] = Field(default_factory=list)
    ingredients: Dict[str, int] = Field(default_factory=dict)
    steps: str = ""
    dietaryPreferences: List[str] = Field(default_factory=list)
    authorId: Optional[str] = None
    authorName: Optional[str] = None
    favoritesCount: int = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
