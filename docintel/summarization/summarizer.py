from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import partial

from docintel.cascade.cascade import CascadeStep, first_success
from docintel.logging.logger import Log
from docintel.providers.models import ErrorKind
from docintel.summarization.backends import SUMMARY_LENGTHS, BaseSummaryBackend
from docintel.summarization.chunker import split_text
from docintel.summarization.heuristic import heuristic_summary

HEURISTIC_PROVIDER_ID = "heuristic"
TRUNCATION_PROVIDER_ID = "truncation"


@dataclass(frozen=True)
class SummaryResult:
    summary: str
    provider_id: str | None = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class Summarizer:
    """Summarizes text of any length under a per-call size limit.

    Text within max_chars goes through the backend cascade in one call.
    Longer text is chunked, each chunk summarized in "short" mode, and the
    merged chunk summaries are summarized again, recursing while the merge
    is still too long. Past max_depth levels the text is truncated instead.
    """

    def __init__(
        self,
        backends: Sequence[BaseSummaryBackend],
        *,
        max_chars: int = 8000,
        overlap: int = 500,
        max_depth: int = 5,
        timeout_seconds: float | None = None,
    ) -> None:
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")
        self._backends = list(backends)
        self._max_chars = max_chars
        self._overlap = overlap
        self._max_depth = max_depth
        self._timeout_seconds = timeout_seconds

    @property
    def max_chars(self) -> int:
        return self._max_chars

    async def summarize(
        self,
        text: str,
        *,
        length: str = "medium",
        fields: Mapping[str, object] | None = None,
        doc_type: str = "document",
    ) -> SummaryResult:
        """Summarize text, ending in the local heuristic when every provider fails."""
        if text.strip():
            result = await self.summarize_large_text(text, length=length)
            if result.ok:
                return result
            Log.warning(f"Summarization failed, using heuristic summary: {result.message}")
        return SummaryResult(
            summary=heuristic_summary(text, fields, doc_type),
            provider_id=HEURISTIC_PROVIDER_ID,
        )

    async def summarize_large_text(
        self,
        text: str,
        *,
        length: str = "medium",
        depth: int = 0,
    ) -> SummaryResult:
        """Provider-only summary; returns an error result instead of a heuristic."""
        if length not in SUMMARY_LENGTHS:
            raise ValueError(f"Unknown summary length '{length}'. Choose from: {SUMMARY_LENGTHS}")
        if len(text) <= self._max_chars:
            return await self._summarize_direct(text, length)
        if depth >= self._max_depth:
            Log.warning(
                f"Summary recursion reached depth {depth}, truncating to {self._max_chars} chars"
            )
            return SummaryResult(
                summary=text[: self._max_chars], provider_id=TRUNCATION_PROVIDER_ID
            )

        chunks = split_text(text, self._max_chars, self._overlap)
        Log.info(f"Summarizing {len(text)} chars as {len(chunks)} chunks (depth {depth})")

        summaries: list[str] = []
        failures: list[SummaryResult] = []
        for index, chunk in enumerate(chunks, start=1):
            chunk_result = await self._summarize_direct(chunk.text, "short")
            if not chunk_result.ok:
                Log.warning(f"Chunk {index}/{len(chunks)} summarization failed, skipping")
                failures.append(chunk_result)
                continue
            summaries.append(chunk_result.summary)

        if not summaries:
            return SummaryResult(
                summary="",
                error=failures[-1].error if failures else ErrorKind.PROVIDER_CALL_FAILED,
                message="Failed to summarize any chunks: "
                + "; ".join(failure.message for failure in failures),
            )

        merged = "\n\n".join(summaries)
        if len(merged) > self._max_chars:
            return await self.summarize_large_text(merged, length=length, depth=depth + 1)

        final = await self._summarize_direct(merged, length)
        if final.ok:
            return final
        Log.warning("Final summary pass failed, returning merged chunk summaries")
        return SummaryResult(summary=merged, provider_id="merged")

    async def _summarize_direct(self, text: str, length: str) -> SummaryResult:
        steps = [
            CascadeStep(
                provider_id=backend.provider_id,
                call=partial(backend.summarize, text, length),
            )
            for backend in self._backends
        ]
        outcome = await first_success(
            steps, timeout_seconds=self._timeout_seconds, label="summary"
        )
        if outcome.ok and outcome.value:
            return SummaryResult(summary=outcome.value, provider_id=outcome.provider_id)
        return SummaryResult(
            summary="",
            error=outcome.error or ErrorKind.EMPTY_EXTRACTION,
            message=outcome.message,
        )
