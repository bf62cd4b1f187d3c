from abc import ABC, abstractmethod

from docintel.storage.models import ActionStatus, Asset, DocumentActionLog


class BaseStorage(ABC):
    """Contract for the persistence collaborator the pipeline writes to."""

    @abstractmethod
    async def create_asset(
        self,
        owner_id: str,
        type: str,
        name: str,
        url: str,
        metadata: dict[str, object],
    ) -> Asset:
        """Persist an asset.

        Raises:
            StorageWriteError: if the asset cannot be written.
        """

    @abstractmethod
    async def get_asset(self, asset_id: str) -> Asset | None:
        """Return the asset, or None if it does not exist."""

    @abstractmethod
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
        """Append an action log entry for an asset.

        Raises:
            StorageWriteError: if the entry cannot be written.
        """

    @abstractmethod
    async def list_document_action_logs(
        self,
        asset_id: str,
        owner_id: str,
    ) -> list[DocumentActionLog]:
        """Return the action log of an asset, oldest first."""
