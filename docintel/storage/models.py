from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ActionType(str, Enum):
    AUTOFILL = "autofill"
    EMAIL = "email"
    TASK = "task"
    SUMMARY = "summary"


class ActionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"
    NEEDS_INPUT = "needs_input"


@dataclass(frozen=True)
class PersistableDocumentAsset:
    """Sanitized, size-bounded projection of one analysis, ready for storage."""

    owner_id: str
    name: str
    url: str
    metadata: dict[str, object]
    type: str = "document"


@dataclass(frozen=True)
class Asset:
    """Represents a row from the assets table."""

    id: str
    owner_id: str
    type: str
    name: str
    url: str | None = None
    metadata: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def extracted_data(self) -> dict[str, object]:
        data = self.metadata.get("extracted_data")
        return dict(data) if isinstance(data, dict) else {}


@dataclass(frozen=True)
class DocumentActionLog:
    """Represents a row from the document_action_logs table."""

    id: str
    asset_id: str
    owner_id: str
    action_type: str
    status: ActionStatus
    data_used: dict[str, object] = field(default_factory=dict)
    result: dict[str, object] | None = None
    confidence_score: int | None = None
    error_message: str | None = None
    created_at: datetime | None = None
