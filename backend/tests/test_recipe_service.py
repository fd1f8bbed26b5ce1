"""Recipe CRUD and favourites service tests."""

import pytest
from bson import ObjectId

from app.core.errors import ForbiddenAction, RecipeNotFound, UserNotFound
from app.db.recipe_store import RecipeStore, SavedRecipeLinks, UserDirectory
from app.models.schemas import RecipeIn, RecipeUpdate
from app.services.recipes import RecipeService
from factories import make_recipe, make_user


@pytest.fixture
def svc(db):
    return RecipeService(RecipeStore(db), UserDirectory(db), SavedRecipeLinks(db))


async def _add_users(db, *names):
    users = [make_user(n) for n in names]
    await db["users"].insert_many(users)
    return [str(u["_id"]) for u in users]


def _recipe_in(**overrides):
    data = {
        "title": "Shakshuka",
        "cuisine": "Middle Eastern",
        "prepTime": 25,
        "ingredients": {"egg": 4, "tomato": 3},
        "steps": "Simmer tomatoes. Poach eggs.",
        "dietaryPreferences": ["Vegetarian", " Vegetarian ", "Gluten-Free"],
    }
    data.update(overrides)
    return RecipeIn(**data)


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_stamps_and_links_author(self, db, svc):
        (alice,) = await _add_users(db, "alice")

        out = await svc.create_recipe(_recipe_in(), alice)

        assert out.authorId == alice
        assert out.authorName == "alice"
        assert out.favoritesCount == 0
        assert out.createdAt is not None
        assert out.createdAt == out.updatedAt
        # defaults to the ingredient map keys
        assert out.ingredientNames == ["egg", "tomato"]
        assert out.dietaryPreferences == ["Vegetarian", "Gluten-Free"]

    @pytest.mark.asyncio
    async def test_explicit_ingredient_names_are_kept(self, db, svc):
        (alice,) = await _add_users(db, "alice")

        out = await svc.create_recipe(_recipe_in(ingredientNames=["Eggs", "Tomatoes"]), alice)

        assert out.ingredientNames == ["Eggs", "Tomatoes"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [str(ObjectId()), "not-an-id"])
    async def test_unknown_author_is_rejected(self, svc, user_id):
        with pytest.raises(UserNotFound):
            await svc.create_recipe(_recipe_in(), user_id)


class TestUpdateDelete:
    @pytest.mark.asyncio
    async def test_author_can_partially_update(self, db, svc):
        (alice,) = await _add_users(db, "alice")
        created = await svc.create_recipe(_recipe_in(), alice)

        out = await svc.update_recipe(created.id, RecipeUpdate(prepTime=40), alice)

        assert out.prepTime == 40
        assert out.title == "Shakshuka"
        assert out.updatedAt >= created.updatedAt

    @pytest.mark.asyncio
    async def test_non_author_cannot_update_or_delete(self, db, svc):
        alice, bob = await _add_users(db, "alice", "bob")
        created = await svc.create_recipe(_recipe_in(), alice)

        with pytest.raises(ForbiddenAction):
            await svc.update_recipe(created.id, RecipeUpdate(title="Mine now"), bob)
        with pytest.raises(ForbiddenAction):
            await svc.delete_recipe(created.id, bob)

    @pytest.mark.asyncio
    async def test_delete_removes_recipe_and_saved_links(self, db, svc):
        alice, bob = await _add_users(db, "alice", "bob")
        created = await svc.create_recipe(_recipe_in(), alice)
        await svc.save_recipe(created.id, bob)

        await svc.delete_recipe(created.id, alice)

        with pytest.raises(RecipeNotFound):
            await svc.get_recipe(created.id)
        assert await db["saved_recipes"].count_documents({}) == 0
        assert await svc.list_saved(bob) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rid", [str(ObjectId()), "garbage"])
    async def test_get_unknown_recipe(self, svc, rid):
        with pytest.raises(RecipeNotFound):
            await svc.get_recipe(rid)


class TestFavourites:
    @pytest.mark.asyncio
    async def test_save_is_idempotent(self, db, svc):
        alice, bob = await _add_users(db, "alice", "bob")
        created = await svc.create_recipe(_recipe_in(), alice)

        await svc.save_recipe(created.id, bob)
        await svc.save_recipe(created.id, bob)

        assert (await svc.get_recipe(created.id)).favoritesCount == 1
        assert [r.id for r in await svc.list_saved(bob)] == [created.id]

    @pytest.mark.asyncio
    async def test_unsave_never_goes_negative(self, db, svc):
        alice, bob = await _add_users(db, "alice", "bob")
        created = await svc.create_recipe(_recipe_in(), alice)
        await svc.save_recipe(created.id, bob)

        await svc.unsave_recipe(created.id, bob)
        await svc.unsave_recipe(created.id, bob)

        assert (await svc.get_recipe(created.id)).favoritesCount == 0
        assert await svc.list_saved(bob) == []

    @pytest.mark.asyncio
    async def test_save_unknown_recipe(self, db, svc):
        (bob,) = await _add_users(db, "bob")
        with pytest.raises(RecipeNotFound):
            await svc.save_recipe(str(ObjectId()), bob)


class TestLookups:
    @pytest.mark.asyncio
    async def test_lists_by_author_and_simple_lookups(self, db, svc):
        alice, bob = await _add_users(db, "alice", "bob")
        await db["recipes"].insert_many([
            make_recipe("Pad Thai", author_id=ObjectId(alice), cuisine="Thai", dietaryPreferences=["Vegan"]),
            make_recipe("Thai Tea", author_id=ObjectId(bob), cuisine="thai", minutes_ago=1),
            make_recipe("Thai Fusion Tacos", author_id=ObjectId(bob), cuisine="Thai-Mexican", minutes_ago=2),
        ])

        assert [r.title for r in await svc.list_by_author(bob)] == ["Thai Tea", "Thai Fusion Tacos"]
        assert await svc.list_by_author("nope") == []
        assert len(await svc.list_all()) == 3
        assert {r.title for r in await svc.find_by_cuisine("THAI")} == {"Pad Thai", "Thai Tea"}
        assert [r.title for r in await svc.find_by_title("pad thai")] == ["Pad Thai"]
        assert [r.title for r in await svc.find_by_dietary("vegan")] == ["Pad Thai"]


class TestUserDirectory:
    @pytest.mark.asyncio
    async def test_find_name_by_id(self, db):
        (alice,) = await _add_users(db, "alice")
        users = UserDirectory(db)

        assert await users.find_name_by_id(alice) == "alice"
        assert await users.find_name_by_id(ObjectId(alice)) == "alice"
        assert await users.find_name_by_id(str(ObjectId())) is None
        assert await users.find_name_by_id("not-an-id") is None
        assert await users.find_name_by_id(None) is None

    @pytest.mark.asyncio
    async def test_single_read_resolves_author_name_directly(self, db, svc):
        (alice,) = await _add_users(db, "alice")
        created = await svc.create_recipe(_recipe_in(), alice)
        await db["users"].update_one({"_id": ObjectId(alice)}, {"$set": {"username": "alice2"}})

        assert (await svc.get_recipe(created.id)).authorName == "alice2"

        await db["users"].delete_one({"_id": ObjectId(alice)})
        assert (await svc.get_recipe(created.id)).authorName is None
