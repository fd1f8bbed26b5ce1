# app/db/recipe_store.py
# recipes / users / saved_recipes 컬렉션 접근 — 서비스는 여기만 거친다

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.son import SON
from motor.motor_asyncio import AsyncIOMotorDatabase


def to_object_id(value: Any) -> Optional[ObjectId]:
    # 문자열/ObjectId → ObjectId. 형식이 틀리면 None
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


# 작성자 조인 (left join: 못 찾으면 빈 배열)
AUTHOR_LOOKUP = {
    "$lookup": {
        "from": "users",
        "localField": "authorId",
        "foreignField": "_id",
        "as": "authorInfo",
    }
}

# 조인 직후 화이트리스트 투영: users 쪽은 username 만 남긴다 (passwordHash/email 차단)
RECIPE_FIELDS = (
    "title", "image", "cuisine", "prepTime", "ingredientNames", "ingredients", "steps",
    "dietaryPreferences", "authorId", "favoritesCount", "createdAt", "updatedAt",
)
AUTHOR_PROJECT = {"$project": {**{f: 1 for f in RECIPE_FIELDS}, "authorInfo.username": 1}}


class RecipeStore:
    """recipes 컬렉션. 타임스탬프는 여기서만 찍는다."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["recipes"]

    async def find(
        self,
        predicate: Dict[str, Any],
        sort: Sequence[Tuple[str, int]],
        skip: int = 0,
        take: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        # 매치 → 정렬 → 페이지 컷 → 작성자 조인 (조인은 잘린 페이지에만)
        pipeline: List[Dict[str, Any]] = [{"$match": predicate}]
        if sort:
            pipeline.append({"$sort": SON(list(sort))})
        if skip > 0:
            pipeline.append({"$skip": int(skip)})
        if take is not None:
            pipeline.append({"$limit": int(take)})
        pipeline.append(AUTHOR_LOOKUP)
        pipeline.append(AUTHOR_PROJECT)
        return await self.col.aggregate(pipeline).to_list(length=None)

    async def count(self, predicate: Dict[str, Any]) -> int:
        return await self.col.count_documents(predicate)

    async def get(self, recipe_id: ObjectId) -> Optional[Dict[str, Any]]:
        # 단건: 조인 없이. 작성자 이름은 UserDirectory.find_name_by_id 로
        return await self.col.find_one({"_id": recipe_id})

    async def insert(self, doc: Dict[str, Any]) -> ObjectId:
        now = datetime.utcnow()
        payload = {**doc, "createdAt": now, "updatedAt": now}
        res = await self.col.insert_one(payload)
        return res.inserted_id

    async def update(self, recipe_id: ObjectId, fields: Dict[str, Any]) -> bool:
        res = await self.col.update_one(
            {"_id": recipe_id},
            {"$set": {**fields, "updatedAt": datetime.utcnow()}},
        )
        return res.matched_count > 0

    async def delete(self, recipe_id: ObjectId) -> bool:
        res = await self.col.delete_one({"_id": recipe_id})
        return res.deleted_count > 0

    async def add_favorites(self, recipe_id: ObjectId, delta: int) -> None:
        q: Dict[str, Any] = {"_id": recipe_id}
        if delta < 0:
            # 음수 금지
            q["favoritesCount"] = {"$gte": -delta}
        await self.col.update_one(q, {"$inc": {"favoritesCount": delta}})


class UserDirectory:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["users"]

    async def exists(self, user_id: ObjectId) -> bool:
        return await self.col.find_one({"_id": user_id}, {"_id": 1}) is not None

    async def find_name_by_id(self, user_id: Any) -> Optional[str]:
        # 없는 사용자 / 잘못된 id → None
        oid = to_object_id(user_id)
        if oid is None:
            return None
        doc = await self.col.find_one({"_id": oid}, {"username": 1})
        return doc.get("username") if doc else None


class SavedRecipeLinks:
    """saved_recipes: (userId, recipeId) 1건 = 저장 관계 (User 문서에 안 박는다)"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["saved_recipes"]

    async def add(self, user_id: ObjectId, recipe_id: ObjectId) -> bool:
        # 새로 생겼을 때만 True
        res = await self.col.update_one(
            {"userId": user_id, "recipeId": recipe_id},
            {"$setOnInsert": {"createdAt": datetime.utcnow()}},
            upsert=True,
        )
        return res.upserted_id is not None

    async def remove(self, user_id: ObjectId, recipe_id: ObjectId) -> bool:
        res = await self.col.delete_one({"userId": user_id, "recipeId": recipe_id})
        return res.deleted_count > 0

    async def recipe_ids(self, user_id: ObjectId) -> List[ObjectId]:
        cur = self.col.find({"userId": user_id}, {"recipeId": 1}).sort([("createdAt", -1), ("_id", -1)])
        return [d["recipeId"] for d in await cur.to_list(length=None)]

    async def drop_recipe(self, recipe_id: ObjectId) -> int:
        res = await self.col.delete_many({"recipeId": recipe_id})
        return res.deleted_count
