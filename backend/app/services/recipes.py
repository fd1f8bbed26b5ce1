# app/services/recipes.py
# 레시피 작성/수정/삭제/저장(즐겨찾기) + 단순 조회

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional
import logging
import re

from bson import ObjectId

from app.core.errors import ForbiddenAction, RecipeNotFound, UserNotFound
from app.db.models.recipe import RecipeDoc
from app.db.recipe_store import RecipeStore, SavedRecipeLinks, UserDirectory, to_object_id
from app.models.schemas import RecipeIn, RecipeOut, RecipeUpdate
from app.services.search.executor import author_name
from app.services.search.sorting import sort_spec

log = logging.getLogger(__name__)

NEWEST = sort_spec("createdAt")

def to_recipe_out(doc: Mapping[str, Any], name: Optional[str] = None) -> RecipeOut:
    # name: 단건 조회에서 따로 찾은 작성자 이름. 없으면 조인 결과 사용
    author = doc.get("authorId")
    return RecipeOut(
        id=str(doc["_id"]),
        title=doc.get("title") or "",
        image=doc.get("image"),
        cuisine=doc.get("cuisine"),
        prepTime=int(doc.get("prepTime") or 0),
        ingredientNames=list(doc.get("ingredientNames") or []),
        ingredients=dict(doc.get("ingredients") or {}),
        steps=doc.get("steps") or "",
        dietaryPreferences=list(doc.get("dietaryPreferences") or []),
        authorId=str(author) if author is not None else None,
        authorName=name if name is not None else author_name(doc),
        favoritesCount=int(doc.get("favoritesCount") or 0),
        createdAt=doc.get("createdAt"),
        updatedAt=doc.get("updatedAt"),
    )

def _exact_ci(text: str) -> Dict[str, str]:
    # 대소문자 무시 완전일치
    return {"$regex": f"^{re.escape(text.strip())}$", "$options": "i"}


class RecipeService:
    def __init__(self, recipes: RecipeStore, users: UserDirectory, saved: SavedRecipeLinks):
        self.recipes = recipes
        self.users = users
        self.saved = saved

    # --- 내부 헬퍼 ---------------------------------------------------------

    async def _user_oid(self, user_id: str) -> ObjectId:
        oid = to_object_id(user_id)
        if oid is None or not await self.users.exists(oid):
            raise UserNotFound(user_id)
        return oid

    async def _load(self, recipe_id: str) -> Dict[str, Any]:
        oid = to_object_id(recipe_id)
        doc = await self.recipes.get(oid) if oid is not None else None
        if not doc:
            raise RecipeNotFound(recipe_id)
        return doc

    async def _load_owned(self, recipe_id: str, user_id: str, action: str) -> Dict[str, Any]:
        doc = await self._load(recipe_id)
        if str(doc.get("authorId")) != user_id:
            raise ForbiddenAction(f"Only the author can {action} this recipe")
        return doc

    async def _detail(self, doc: Mapping[str, Any]) -> RecipeOut:
        return to_recipe_out(doc, await self.users.find_name_by_id(doc.get("authorId")))

    async def _list(self, predicate: Dict[str, Any]) -> List[RecipeOut]:
        return [to_recipe_out(d) for d in await self.recipes.find(predicate, NEWEST)]

    # --- 작성/수정/삭제 ------------------------------------------------------

    async def create_recipe(self, data: RecipeIn, user_id: str) -> RecipeOut:
        author = await self._user_oid(user_id)
        names = data.ingredientNames if data.ingredientNames is not None else list(data.ingredients)
        doc = RecipeDoc(
            **data.model_dump(exclude={"ingredientNames"}),
            ingredientNames=names,
            authorId=author,
        )
        rid = await self.recipes.insert(doc.model_dump())
        log.info("recipe created id=%s author=%s", rid, author)
        return await self._detail(await self.recipes.get(rid))

    async def get_recipe(self, recipe_id: str) -> RecipeOut:
        return await self._detail(await self._load(recipe_id))

    async def update_recipe(self, recipe_id: str, updates: RecipeUpdate, user_id: str) -> RecipeOut:
        doc = await self._load_owned(recipe_id, user_id, "update")
        fields = updates.model_dump(exclude_none=True)
        if fields:
            await self.recipes.update(doc["_id"], fields)
        return await self._detail(await self.recipes.get(doc["_id"]))

    async def delete_recipe(self, recipe_id: str, user_id: str) -> None:
        doc = await self._load_owned(recipe_id, user_id, "delete")
        await self.recipes.delete(doc["_id"])
        dropped = await self.saved.drop_recipe(doc["_id"])
        log.info("recipe deleted id=%s (saved links dropped: %d)", doc["_id"], dropped)

    # --- 저장(즐겨찾기) ------------------------------------------------------

    async def save_recipe(self, recipe_id: str, user_id: str) -> None:
        doc = await self._load(recipe_id)
        user = await self._user_oid(user_id)
        if await self.saved.add(user, doc["_id"]):
            await self.recipes.add_favorites(doc["_id"], 1)

    async def unsave_recipe(self, recipe_id: str, user_id: str) -> None:
        doc = await self._load(recipe_id)
        user = await self._user_oid(user_id)
        if await self.saved.remove(user, doc["_id"]):
            await self.recipes.add_favorites(doc["_id"], -1)

    async def list_saved(self, user_id: str) -> List[RecipeOut]:
        user = await self._user_oid(user_id)
        ids = await self.saved.recipe_ids(user)
        if not ids:
            return []
        by_id = {d["_id"]: d for d in await self.recipes.find({"_id": {"$in": ids}}, [])}
        # 저장한 순서(최근 먼저) 유지, 지워진 레시피는 건너뜀
        return [to_recipe_out(by_id[i]) for i in ids if i in by_id]

    # --- 단순 조회 -----------------------------------------------------------

    async def list_by_author(self, user_id: str) -> List[RecipeOut]:
        oid = to_object_id(user_id)
        if oid is None:
            return []
        return await self._list({"authorId": oid})

    async def list_all(self) -> List[RecipeOut]:
        return await self._list({})

    async def find_by_cuisine(self, cuisine: str) -> List[RecipeOut]:
        return await self._list({"cuisine": _exact_ci(cuisine)})

    async def find_by_title(self, title: str) -> List[RecipeOut]:
        return await self._list({"title": _exact_ci(title)})

    async def find_by_dietary(self, tag: str) -> List[RecipeOut]:
        return await self._list({"dietaryPreferences": _exact_ci(tag)})
