from collections.abc import Mapping, Sequence
from dataclasses import asdict
from typing import Any

from docintel.logging.logger import Log
from docintel.pipeline.exceptions import AssetNotFoundError, UnsupportedActionError
from docintel.pipeline.models import ActionResult
from docintel.sanitization.sanitizer import clean_object, sanitize_text
from docintel.storage.base import BaseStorage
from docintel.storage.models import ActionStatus, ActionType, Asset, DocumentActionLog
from docintel.suggestions.models import FormField
from docintel.suggestions.suggester import DEFAULT_TONE, ActionSuggester

RERUN_ACTIONS = (ActionType.EMAIL.value, ActionType.TASK.value, ActionType.SUMMARY.value)


class DocumentActionService:
    """Re-runs single suggestion parts against a persisted document.

    Every run appends a DocumentActionLog entry for the asset, including
    runs that fail or cannot proceed without extracted data.
    """

    def __init__(self, storage: BaseStorage, suggester: ActionSuggester) -> None:
        self._storage = storage
        self._suggester = suggester

    async def autofill(
        self,
        asset_id: str,
        owner_id: str,
        form_schema: Sequence[FormField] | None = None,
    ) -> ActionResult:
        """Map the persisted extracted data onto a form schema.

        Raises:
            AssetNotFoundError: if the asset is missing or owned by someone else.
        """
        asset = await self._load_asset(asset_id, owner_id)
        extracted = asset.extracted_data
        data_used: dict[str, object] = {
            "extracted_data": extracted,
            "form_schema": [asdict(f) for f in form_schema] if form_schema else None,
        }
        action = ActionType.AUTOFILL.value

        if not extracted:
            return await self._record(asset, action, ActionStatus.NEEDS_INPUT, data_used)
        if not self._suggester.llm_available:
            return await self._record(
                asset,
                action,
                ActionStatus.FAILED,
                data_used,
                error_message="Form autofill requires a configured LLM provider",
            )

        suggestion = await self._suggester.suggest_autofill(extracted, form_schema)
        return await self._record(
            asset,
            action,
            ActionStatus.SUCCESS,
            data_used,
            result=asdict(suggestion),
            confidence_score=round(suggestion.confidence * 100),
        )

    async def run_action(
        self,
        asset_id: str,
        owner_id: str,
        action_type: str,
        action_data: Mapping[str, Any] | None = None,
    ) -> ActionResult:
        """Re-run the email, task or summary suggestion for a document.

        Raises:
            AssetNotFoundError: if the asset is missing or owned by someone else.
            UnsupportedActionError: if action_type is not email, task or summary.
        """
        asset = await self._load_asset(asset_id, owner_id)
        extracted = asset.extracted_data
        data_used: dict[str, object] = {
            "extracted_data": extracted,
            "action_data": dict(action_data) if action_data else None,
        }

        if action_type not in RERUN_ACTIONS:
            await self._record(
                asset,
                action_type,
                ActionStatus.FAILED,
                data_used,
                error_message=f"Unsupported action type: {action_type}",
            )
            raise UnsupportedActionError(action_type)

        if not extracted:
            return await self._record(asset, action_type, ActionStatus.NEEDS_INPUT, data_used)

        try:
            result = await self._execute(asset, action_type, action_data or {})
        except Exception as exc:
            Log.exception(f"{action_type} action failed: {exc}", asset_id=asset.id)
            await self._record(
                asset,
                action_type,
                ActionStatus.FAILED,
                data_used,
                error_message=str(exc),
            )
            raise

        return await self._record(asset, action_type, ActionStatus.SUCCESS, data_used, result=result)

    async def list_logs(self, asset_id: str, owner_id: str) -> list[DocumentActionLog]:
        await self._load_asset(asset_id, owner_id)
        return await self._storage.list_document_action_logs(asset_id, owner_id)

    async def _execute(
        self,
        asset: Asset,
        action_type: str,
        action_data: Mapping[str, Any],
    ) -> dict[str, object]:
        extracted = asset.extracted_data
        if action_type == ActionType.SUMMARY.value:
            return await self._suggester.summarize(extracted)

        summary = _persisted_summary(asset) or (await self._suggester.summarize(extracted))["summary"]
        if action_type == ActionType.EMAIL.value:
            tone = str(action_data.get("tone") or DEFAULT_TONE)
            return asdict(await self._suggester.draft_email(extracted, summary, tone))
        return asdict(await self._suggester.plan_tasks(extracted, summary))

    async def _load_asset(self, asset_id: str, owner_id: str) -> Asset:
        asset = await self._storage.get_asset(asset_id)
        if asset is None or asset.owner_id != owner_id:
            raise AssetNotFoundError(asset_id)
        return asset

    async def _record(
        self,
        asset: Asset,
        action_type: str,
        status: ActionStatus,
        data_used: dict[str, object],
        *,
        result: dict[str, object] | None = None,
        confidence_score: int | None = None,
        error_message: str | None = None,
    ) -> ActionResult:
        result = clean_object(result) if result is not None else None
        entry = await self._storage.create_document_action_log(
            asset_id=asset.id,
            owner_id=asset.owner_id,
            action_type=sanitize_text(action_type),
            status=status,
            data_used=clean_object(data_used),
            result=result,
            confidence_score=confidence_score,
            error_message=sanitize_text(error_message) or None,
        )
        Log.info(
            f"Logged {action_type} action",
            asset_id=asset.id,
            status=status.value,
            log_id=entry.id,
        )
        return ActionResult(
            action_type=action_type,
            status=status.value,
            result=result or {},
            log_id=entry.id,
        )


def _persisted_summary(asset: Asset) -> str:
    suggestions = asset.metadata.get("suggestions")
    if not isinstance(suggestions, dict):
        return ""
    summary = suggestions.get("summary")
    if isinstance(summary, dict) and isinstance(summary.get("summary"), str):
        return summary["summary"]
    return ""
