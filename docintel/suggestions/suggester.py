"""Generates the summary, autofill, email and task suggestions for a document."""

import asyncio
import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict
from functools import partial
from typing import Any, TypeVar

from docintel.cascade.cascade import CascadeStep, Outcome, SoftFailure, Success, first_success
from docintel.logging.logger import Log
from docintel.parsing.json_extractor import extract_json_object
from docintel.prompts.prompt_loader import load_prompt_template
from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest
from docintel.suggestions.exceptions import SuggestionValidationError
from docintel.suggestions.models import (
    DEFAULT_FORM_SCHEMA,
    AutofillSuggestion,
    EmailDraft,
    FormField,
    SuggestionBundle,
    TaskList,
)
from docintel.suggestions.validator import build_autofill, build_email, build_tasks
from docintel.summarization.heuristic import heuristic_summary
from docintel.summarization.summarizer import Summarizer

QUOTA_MARKERS = ("plan", "quota")
CONTEXT_CHARS = 2000
DEFAULT_TONE = "professional and friendly"

T = TypeVar("T")


def is_quota_error(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in QUOTA_MARKERS)


class ActionSuggester:
    """Builds a SuggestionBundle from extracted data and document text.

    The summary comes from the URL summarizer, then an LLM executive
    summary, then the local heuristic. Autofill, email and tasks are one LLM
    call each; a failed or malformed reply leaves that part empty.
    """

    def __init__(
        self,
        *,
        summarizer: Summarizer,
        llm: BaseProviderClient | None,
        llm_model: str,
        timeout_seconds: float | None = None,
        form_schema: Sequence[FormField] = DEFAULT_FORM_SCHEMA,
    ) -> None:
        self._summarizer = summarizer
        self._llm = llm
        self._llm_model = llm_model
        self._timeout_seconds = timeout_seconds
        self._form_schema = list(form_schema)
        self._prompts = {
            name: load_prompt_template(name)
            for name in (
                "executive_summary_system",
                "executive_summary_user",
                "form_mapper_system",
                "form_mapper_user",
                "email_writer_system",
                "email_writer_user",
                "task_planner_system",
                "task_planner_user",
            )
        }

    @property
    def llm_available(self) -> bool:
        return self._llm is not None and self._llm.is_available()

    async def suggest(self, extracted: Mapping[str, Any], text: str = "") -> SuggestionBundle:
        """Run every suggestion step; never raises for provider failures."""
        context = text or str(extracted.get("raw_text_snippet") or "")

        if not self.llm_available:
            Log.warning("No LLM configured, returning summary-only suggestions")
            summary, quota_limited = await self._summary_step(extracted, context)
            return SuggestionBundle(summary={"summary": summary}, quota_limited=quota_limited)

        async def summary_then_drafts() -> tuple[str, bool, EmailDraft, TaskList]:
            summary, quota_limited = await self._summary_step(extracted, context)
            email, tasks = await asyncio.gather(
                self.draft_email(extracted, summary),
                self.plan_tasks(extracted, summary),
            )
            return summary, quota_limited, email, tasks

        autofill, (summary, quota_limited, email, tasks) = await asyncio.gather(
            self.suggest_autofill(extracted),
            summary_then_drafts(),
        )
        return SuggestionBundle(
            summary={"summary": summary},
            autofill=autofill,
            email=email,
            tasks=tasks,
            quota_limited=quota_limited,
        )

    async def summarize(self, extracted: Mapping[str, Any], text: str = "") -> dict[str, str]:
        context = text or str(extracted.get("raw_text_snippet") or "")
        summary, _ = await self._summary_step(extracted, context)
        return {"summary": summary}

    async def suggest_autofill(
        self,
        extracted: Mapping[str, Any],
        form_schema: Sequence[FormField] | None = None,
    ) -> AutofillSuggestion:
        schema = list(form_schema) if form_schema is not None else self._form_schema
        user_prompt = self._prompts["form_mapper_user"].format(
            extracted_json=_to_json(extracted),
            form_schema=json.dumps([asdict(f) for f in schema], indent=2),
        )
        return await self._ask(
            "autofill",
            self._prompts["form_mapper_system"],
            user_prompt,
            build=build_autofill,
            placeholder=AutofillSuggestion,
        )

    async def draft_email(
        self,
        extracted: Mapping[str, Any],
        summary: str,
        tone: str = DEFAULT_TONE,
    ) -> EmailDraft:
        user_prompt = self._prompts["email_writer_user"].format(
            extracted_json=_to_json(extracted),
            summary=summary,
            tone=tone,
        )
        return await self._ask(
            "email",
            self._prompts["email_writer_system"],
            user_prompt,
            build=build_email,
            placeholder=EmailDraft,
        )

    async def plan_tasks(self, extracted: Mapping[str, Any], summary: str) -> TaskList:
        user_prompt = self._prompts["task_planner_user"].format(
            extracted_json=_to_json(extracted),
            summary=summary,
        )
        return await self._ask(
            "tasks",
            self._prompts["task_planner_system"],
            user_prompt,
            build=build_tasks,
            placeholder=TaskList,
        )

    async def _summary_step(self, extracted: Mapping[str, Any], context: str) -> tuple[str, bool]:
        extracted_json = _to_json(extracted)
        composite = f"Document Content:\n{context}\n\nExtracted Information:\n{extracted_json}"

        result = await self._summarizer.summarize_large_text(composite)
        if result.ok and result.summary:
            return result.summary, False

        quota_limited = is_quota_error(result.message)
        if quota_limited:
            Log.warning(f"Summary provider plan/quota error, using fallback: {result.message}")
        else:
            Log.warning(f"Summary provider failed, using fallback: {result.message}")

        if self.llm_available:
            reply = await self._ask_json(
                "executive summary",
                self._prompts["executive_summary_system"],
                self._prompts["executive_summary_user"].format(
                    extracted_json=extracted_json,
                    document_text=context[:CONTEXT_CHARS],
                ),
                max_tokens=300,
            )
            summary = reply.get("summary") if reply else None
            if isinstance(summary, str) and summary.strip():
                return summary.strip(), quota_limited

        doc_type = str(extracted.get("doc_type") or "document")
        return heuristic_summary(context, extracted, doc_type), quota_limited

    async def _ask(
        self,
        label: str,
        system_prompt: str,
        user_prompt: str,
        *,
        build: Callable[[dict[str, Any]], T],
        placeholder: Callable[[], T],
    ) -> T:
        if not self.llm_available:
            return placeholder()
        reply = await self._ask_json(label, system_prompt, user_prompt)
        if reply is None:
            return placeholder()
        try:
            return build(reply)
        except SuggestionValidationError as exc:
            Log.warning(f"{label} suggestion rejected: {exc}")
            return placeholder()

    async def _ask_json(
        self,
        label: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 500,
    ) -> dict[str, Any] | None:
        if self._llm is None:
            return None
        request = ProviderRequest(
            prompt=user_prompt,
            system_prompt=system_prompt,
            max_tokens=max_tokens,
        )
        outcome = await first_success(
            [CascadeStep(self._llm.provider_id, partial(self._call_llm, request))],
            timeout_seconds=self._timeout_seconds,
            label=label,
        )
        if not outcome.ok or outcome.value is None:
            return None
        Log.debug(f"{label} raw reply: {outcome.value!r}")
        parsed = extract_json_object(outcome.value)
        if parsed is None:
            Log.warning(f"{label}: reply was not a JSON object")
        return parsed

    async def _call_llm(self, request: ProviderRequest) -> Outcome[str]:
        if self._llm is None:
            return SoftFailure(ErrorKind.PROVIDER_UNAVAILABLE, "no LLM configured")
        response = await self._llm.call(self._llm_model, request)
        if not response.ok:
            return SoftFailure(
                response.error_kind or ErrorKind.PROVIDER_CALL_FAILED,
                response.error or "",
            )
        return Success(str(response.output))


def _to_json(data: Mapping[str, Any]) -> str:
    return json.dumps(dict(data), indent=2, ensure_ascii=False, default=str)
