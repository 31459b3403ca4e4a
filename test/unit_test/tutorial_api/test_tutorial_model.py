"""Unit tests for the tutorial model against a mocked motor collection."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument

from app.tutorial_model import TutorialModel, create_tutorial_model, to_json


@pytest.fixture
def collection() -> MagicMock:
    return MagicMock()


@pytest.fixture
def model(collection: MagicMock) -> TutorialModel:
    return TutorialModel(collection)


def _cursor_returning(collection: MagicMock, documents: list) -> None:
    collection.find.return_value.to_list = AsyncMock(return_value=documents)


class TestToJson:
    def test_renames_id_and_drops_version(self):
        oid = ObjectId()

        data = to_json({"_id": oid, "__v": 0, "title": "Intro"})

        assert data == {"id": str(oid), "title": "Intro"}


@pytest.mark.asyncio
class TestCreate:
    async def test_inserts_with_defaults_and_timestamps(self, model, collection):
        oid = ObjectId()
        collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))

        tutorial = await model.create({"title": "Intro", "description": "First steps"})

        inserted = collection.insert_one.await_args.args[0]
        assert inserted["published"] is False
        assert inserted["createdAt"] == inserted["updatedAt"]
        assert tutorial["id"] == str(oid)
        assert tutorial["title"] == "Intro"
        assert tutorial["description"] == "First steps"
        assert "_id" not in tutorial


@pytest.mark.asyncio
class TestFind:
    async def test_find_all_without_title_matches_everything(self, model, collection):
        oid = ObjectId()
        _cursor_returning(collection, [{"_id": oid, "title": "Intro"}])

        tutorials = await model.find_all()

        collection.find.assert_called_once_with({})
        assert tutorials == [{"id": str(oid), "title": "Intro"}]

    async def test_find_all_filters_title_case_insensitively(self, model, collection):
        _cursor_returning(collection, [])

        await model.find_all(title="intro")

        collection.find.assert_called_once_with({"title": {"$regex": "intro", "$options": "i"}})

    async def test_find_published(self, model, collection):
        _cursor_returning(collection, [])

        assert await model.find_published() == []
        collection.find.assert_called_once_with({"published": True})

    async def test_find_by_id(self, model, collection):
        oid = ObjectId()
        collection.find_one = AsyncMock(return_value={"_id": oid, "title": "Intro"})

        tutorial = await model.find_by_id(str(oid))

        collection.find_one.assert_awaited_once_with({"_id": oid})
        assert tutorial == {"id": str(oid), "title": "Intro"}

    async def test_find_by_id_not_found(self, model, collection):
        collection.find_one = AsyncMock(return_value=None)

        assert await model.find_by_id(str(ObjectId())) is None

    async def test_find_by_invalid_id_skips_query(self, model, collection):
        collection.find_one = AsyncMock()

        assert await model.find_by_id("not-an-object-id") is None
        collection.find_one.assert_not_awaited()


@pytest.mark.asyncio
class TestUpdate:
    async def test_sets_fields_and_bumps_updated_at(self, model, collection):
        oid = ObjectId()
        collection.find_one_and_update = AsyncMock(return_value={"_id": oid, "title": "New"})

        tutorial = await model.update_by_id(str(oid), {"title": "New"})

        args = collection.find_one_and_update.await_args
        assert args.args[0] == {"_id": oid}
        assert args.args[1]["$set"]["title"] == "New"
        assert "updatedAt" in args.args[1]["$set"]
        assert args.kwargs["return_document"] == ReturnDocument.AFTER
        assert tutorial == {"id": str(oid), "title": "New"}

    async def test_not_found(self, model, collection):
        collection.find_one_and_update = AsyncMock(return_value=None)

        assert await model.update_by_id(str(ObjectId()), {"title": "New"}) is None

    async def test_invalid_id(self, model, collection):
        collection.find_one_and_update = AsyncMock()

        assert await model.update_by_id("42", {"title": "New"}) is None
        collection.find_one_and_update.assert_not_awaited()


@pytest.mark.asyncio
class TestDelete:
    @pytest.mark.parametrize("deleted_count, expected", [(1, True), (0, False)])
    async def test_delete_by_id(self, model, collection, deleted_count, expected):
        collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=deleted_count))

        assert await model.delete_by_id(str(ObjectId())) is expected

    async def test_delete_by_invalid_id(self, model, collection):
        collection.delete_one = AsyncMock()

        assert await model.delete_by_id("42") is False
        collection.delete_one.assert_not_awaited()

    async def test_delete_all_returns_count(self, model, collection):
        collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=3))

        assert await model.delete_all() == 3
        collection.delete_many.assert_awaited_once_with({})


def test_factory_binds_to_default_database_collection():
    client = MagicMock()

    model = create_tutorial_model(client)

    client.get_default_database.assert_called_once_with("testdb")
    client.get_default_database.return_value.__getitem__.assert_called_once_with("tutorials")
    assert model.collection is client.get_default_database.return_value.__getitem__.return_value
