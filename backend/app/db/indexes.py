# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes()를 await로 호출한다.

from app.db.init import get_db

# 검색 필터/정렬 대상 필드
async def ensure_recipe_indexes(db):
    col = db["recipes"]
    await col.create_index("title")
    await col.create_index("cuisine")
    await col.create_index("prepTime")
    await col.create_index("dietaryPreferences")
    await col.create_index("authorId")
    await col.create_index([("favoritesCount", -1), ("_id", -1)])
    await col.create_index([("createdAt", -1), ("_id", -1)])

async def ensure_indexes(db=None):
    db = db if db is not None else get_db()

    # 사용자: 이메일 중복 금지
    await db["users"].create_index("email", unique=True)

    # 저장(즐겨찾기) 링크: 사용자-레시피 쌍 1건
    await db["saved_recipes"].create_index([("userId", 1), ("recipeId", 1)], unique=True)
    await db["saved_recipes"].create_index("recipeId")

    await ensure_recipe_indexes(db)
