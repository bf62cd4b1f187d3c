import copy
import uuid
from datetime import datetime, timezone

from docintel.storage.base import BaseStorage
from docintel.storage.models import ActionStatus, Asset, DocumentActionLog


class InMemoryStorage(BaseStorage):
    """Process-local storage for the CLI, local runs and tests."""

    def __init__(self) -> None:
        self._assets: dict[str, Asset] = {}
        self._logs: list[DocumentActionLog] = []

    async def create_asset(
        self,
        owner_id: str,
        type: str,
        name: str,
        url: str,
        metadata: dict[str, object],
    ) -> Asset:
        asset = Asset(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            type=type,
            name=name,
            url=url,
            metadata=copy.deepcopy(metadata),
            created_at=datetime.now(timezone.utc),
        )
        self._assets[asset.id] = asset
        return asset

    async def get_asset(self, asset_id: str) -> Asset | None:
        return self._assets.get(asset_id)

    async def create_document_action_log(
        self,
        asset_id: str,
        owner_id: str,
        action_type: str,
        status: ActionStatus,
        data_used: dict[str, object],
        result: dict[str, object] | None = None,
        confidence_score: int | None = None,
        error_message: str | None = None,
    ) -> DocumentActionLog:
        log = DocumentActionLog(
            id=str(uuid.uuid4()),
            asset_id=asset_id,
            owner_id=owner_id,
            action_type=action_type,
            status=status,
            data_used=copy.deepcopy(data_used),
            result=copy.deepcopy(result),
            confidence_score=confidence_score,
            error_message=error_message,
            created_at=datetime.now(timezone.utc),
        )
        self._logs.append(log)
        return log

    async def list_document_action_logs(
        self,
        asset_id: str,
        owner_id: str,
    ) -> list[DocumentActionLog]:
        return [
            log for log in self._logs if log.asset_id == asset_id and log.owner_id == owner_id
        ]
