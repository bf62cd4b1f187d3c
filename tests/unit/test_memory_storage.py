import pytest

from docintel.storage.memory_storage import InMemoryStorage
from docintel.storage.models import ActionStatus


class TestInMemoryStorage:
    @pytest.mark.asyncio
    async def test_create_and_get_asset(self) -> None:
        storage = InMemoryStorage()
        metadata = {"extracted_data": {"issuer": "Acme"}}
        asset = await storage.create_asset("u1", "document", "bill.pdf", "data:...", metadata)
        metadata["extracted_data"]["issuer"] = "changed"

        loaded = await storage.get_asset(asset.id)
        assert loaded == asset
        assert loaded.owner_id == "u1"
        assert loaded.extracted_data == {"issuer": "Acme"}
        assert loaded.created_at is not None

    @pytest.mark.asyncio
    async def test_missing_asset(self) -> None:
        assert await InMemoryStorage().get_asset("nope") is None

    @pytest.mark.asyncio
    async def test_action_logs_are_scoped_and_ordered(self) -> None:
        storage = InMemoryStorage()
        first = await storage.create_document_action_log(
            "a1", "u1", "email", ActionStatus.SUCCESS, {"x": 1}, result={"subject": "s"}
        )
        second = await storage.create_document_action_log(
            "a1", "u1", "task", ActionStatus.FAILED, {}, error_message="boom"
        )
        await storage.create_document_action_log("a2", "u1", "email", ActionStatus.SUCCESS, {})
        await storage.create_document_action_log("a1", "u2", "email", ActionStatus.SUCCESS, {})

        logs = await storage.list_document_action_logs("a1", "u1")
        assert logs == [first, second]
        assert logs[1].error_message == "boom"


class TestAssetExtractedData:
    @pytest.mark.asyncio
    async def test_non_dict_extracted_data_is_empty(self) -> None:
        storage = InMemoryStorage()
        asset = await storage.create_asset("u", "document", "n", "", {"extracted_data": "oops"})
        assert asset.extracted_data == {}
