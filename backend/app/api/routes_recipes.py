# app/api/routes_recipes.py
# 레시피 검색(고급 검색) + 작성/수정/삭제 + 저장(즐겨찾기)

from __future__ import annotations
from typing import Annotated, List
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pymongo.errors import PyMongoError

from app.core.deps import get_current_user_id
from app.core.errors import ForbiddenAction, RecipeNotFound, SearchUnavailable, UserNotFound
from app.db.init import get_db
from app.db.recipe_store import RecipeStore, SavedRecipeLinks, UserDirectory
from app.models.schemas import RecipeIn, RecipeOut, RecipeUpdate, SearchQuery, SearchResponse
from app.services.recipes import RecipeService
from app.services.search.executor import RecipeSearch

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

# ------------------------------
# 서비스 주입
# ------------------------------

def get_recipe_search(db=Depends(get_db)) -> RecipeSearch:
    return RecipeSearch(RecipeStore(db))

def get_recipe_service(db=Depends(get_db)) -> RecipeService:
    return RecipeService(RecipeStore(db), UserDirectory(db), SavedRecipeLinks(db))

async def _call(coro):
    # 서비스 예외 → HTTP 상태
    try:
        return await coro
    except (RecipeNotFound, UserNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ForbiddenAction as e:
        raise HTTPException(status_code=403, detail=str(e))
    except PyMongoError:
        # 드라이버 메시지는 로그에만
        log.exception("recipe store error")
        raise HTTPException(status_code=503, detail="recipe store unavailable")

# ------------------------------
# 고급 검색 — 정적 경로를 /{rid} 보다 먼저 선언
# ------------------------------

@router.get("/search", response_model=SearchResponse)
async def search_recipes(
    query: Annotated[SearchQuery, Query()],
    search: RecipeSearch = Depends(get_recipe_search),
):
    try:
        return await search.search(query)
    except SearchUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.get("/search/cuisine", response_model=List[RecipeOut])
async def search_by_cuisine(type: str, svc: RecipeService = Depends(get_recipe_service)):
    return await _call(svc.find_by_cuisine(type))

@router.get("/search/title", response_model=List[RecipeOut])
async def search_by_title(name: str, svc: RecipeService = Depends(get_recipe_service)):
    return await _call(svc.find_by_title(name))

@router.get("/search/dietary", response_model=List[RecipeOut])
async def search_by_dietary(tag: str, svc: RecipeService = Depends(get_recipe_service)):
    return await _call(svc.find_by_dietary(tag))

# ------------------------------
# 사용자별 목록
# ------------------------------

@router.get("/user/my-recipes", response_model=List[RecipeOut])
async def my_recipes(
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await _call(svc.list_by_author(user_id))

@router.get("/user/saved", response_model=List[RecipeOut])
async def my_saved_recipes(
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await _call(svc.list_saved(user_id))

@router.get("/author/{user_id}", response_model=List[RecipeOut])
async def recipes_by_author(user_id: str, svc: RecipeService = Depends(get_recipe_service)):
    return await _call(svc.list_by_author(user_id))

# ------------------------------
# CRUD
# ------------------------------

@router.get("", response_model=List[RecipeOut])
async def list_recipes(svc: RecipeService = Depends(get_recipe_service)):
    return await _call(svc.list_all())

@router.post("", response_model=RecipeOut, status_code=201)
async def create_recipe(
    payload: RecipeIn,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await _call(svc.create_recipe(payload, user_id))

@router.get("/{rid}", response_model=RecipeOut)
async def get_recipe(rid: str, svc: RecipeService = Depends(get_recipe_service)):
    return await _call(svc.get_recipe(rid))

@router.put("/{rid}", response_model=RecipeOut)
async def update_recipe(
    rid: str,
    payload: RecipeUpdate,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    return await _call(svc.update_recipe(rid, payload, user_id))

@router.delete("/{rid}", status_code=204)
async def delete_recipe(
    rid: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    await _call(svc.delete_recipe(rid, user_id))
    return Response(status_code=204)

# ------------------------------
# 저장(즐겨찾기)
# ------------------------------

@router.post("/{rid}/save")
async def save_recipe(
    rid: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    await _call(svc.save_recipe(rid, user_id))
    return {"ok": True}

@router.delete("/{rid}/unsave")
async def unsave_recipe(
    rid: str,
    user_id: str = Depends(get_current_user_id),
    svc: RecipeService = Depends(get_recipe_service),
):
    await _call(svc.unsave_recipe(rid, user_id))
    return {"ok": True}
