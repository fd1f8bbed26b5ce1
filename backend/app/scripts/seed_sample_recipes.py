# scripts/seed_sample_recipes.py
# 로컬 개발용 샘플 사용자/레시피 시드 (여러 번 돌려도 중복 없음)
# 사용: python -m app.scripts.seed_sample_recipes
import asyncio
import logging
import random
from datetime import datetime, timedelta
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import UpdateOne

from app.core.config import settings
from app.db.indexes import ensure_indexes
from app.db.models.recipe import RecipeDoc
from app.db.models.user import UserDoc

log = logging.getLogger("seed")

USERS = [
    UserDoc(username="alice", email="alice@example.com"),
    UserDoc(username="bora", email="bora@example.com"),
    UserDoc(username="chen", email="chen@example.com"),
]

# (제목, 요리, 조리시간, 재료→분량, 식단 태그)
RECIPES = [
    ("Chickpea Curry", "Indian", 35, {"chickpeas": 400, "coconut milk": 200, "onion": 1}, ["Vegan", "Gluten-Free"]),
    ("Margherita Pizza", "Italian", 45, {"flour": 300, "tomato": 2, "mozzarella": 125}, ["Vegetarian"]),
    ("Bibimbap", "Korean", 40, {"rice": 200, "spinach": 100, "egg": 1, "gochujang": 1}, ["Vegetarian"]),
    ("Kimchi Fried Rice", "Korean", 15, {"rice": 200, "kimchi": 150, "egg": 1}, []),
    ("Avocado Toast", "American", 10, {"bread": 2, "avocado": 1, "lemon": 1}, ["Vegan"]),
    ("Keto Salmon Bowl", "Japanese", 25, {"salmon": 150, "avocado": 1, "cucumber": 1}, ["Keto", "Gluten-Free"]),
    ("Pad Thai", "Thai", 30, {"rice noodles": 200, "tofu": 150, "peanuts": 30}, ["Vegetarian"]),
    ("Greek Salad", "Greek", 10, {"tomato": 2, "cucumber": 1, "feta": 100, "olive": 10}, ["Vegetarian", "Keto"]),
]

def _recipe_ops(author_ids: List[Any]) -> List[UpdateOne]:
    ops: List[UpdateOne] = []
    base = datetime.utcnow() - timedelta(days=len(RECIPES))
    for i, (title, cuisine, minutes, ings, diets) in enumerate(RECIPES):
        doc = RecipeDoc(
            title=title,
            cuisine=cuisine,
            prepTime=minutes,
            ingredients=ings,
            ingredientNames=list(ings),
            steps="Prep the ingredients. Cook. Serve.",
            dietaryPreferences=diets,
            authorId=author_ids[i % len(author_ids)],
            favoritesCount=random.randint(0, 20),
        )
        stamp = base + timedelta(days=i)
        payload: Dict[str, Any] = {**doc.model_dump(), "updatedAt": stamp}
        # 제목+작성자 기준 업서트
        ops.append(UpdateOne(
            {"title": title, "authorId": doc.authorId},
            {"$set": payload, "$setOnInsert": {"createdAt": stamp}},
            upsert=True,
        ))
    return ops

async def main() -> None:
    client = AsyncIOMotorClient(settings.MONGO_URI)
    db = client[settings.MONGO_DB]
    try:
        await ensure_indexes(db)

        await db["users"].bulk_write([
            UpdateOne({"email": u.email}, {"$setOnInsert": u.model_dump()}, upsert=True)
            for u in USERS
        ])
        users = await db["users"].find({"email": {"$in": [u.email for u in USERS]}}, {"_id": 1}).to_list(length=None)
        author_ids = [u["_id"] for u in users]

        res = await db["recipes"].bulk_write(_recipe_ops(author_ids))
        log.info("seeded users=%d recipes upserted=%d modified=%d",
                 len(author_ids), res.upserted_count, res.modified_count)
    finally:
        client.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
