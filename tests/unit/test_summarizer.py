from collections.abc import Callable
from typing import Any

import pytest

from docintel.cascade.cascade import Outcome, SoftFailure, Success
from docintel.providers.models import ErrorKind, ProviderRequest, ProviderResponse
from docintel.summarization.backends import BaseSummaryBackend, PromptSummaryBackend
from docintel.summarization.heuristic import heuristic_summary
from docintel.summarization.summarizer import Summarizer


class RecordingBackend(BaseSummaryBackend):
    """Summarizes by keeping a fraction of the input and records each call."""

    def __init__(self, ratio: float = 0.1, fail: bool = False) -> None:
        self.calls: list[tuple[str, str]] = []
        self._ratio = ratio
        self._fail = fail

    @property
    def provider_id(self) -> str:
        return "recording"

    async def summarize(self, text: str, length: str = "medium") -> Outcome[str]:
        self.calls.append((text, length))
        if self._fail:
            return SoftFailure(ErrorKind.PROVIDER_CALL_FAILED, "down")
        return Success(text[: max(1, int(len(text) * self._ratio))])

    def _build_request(self, text: str, length: str) -> ProviderRequest:
        raise NotImplementedError


class TestSummarizeLargeText:
    @pytest.mark.asyncio
    async def test_text_at_limit_is_one_direct_call(self) -> None:
        backend = RecordingBackend()
        summarizer = Summarizer([backend], max_chars=8000, overlap=500)
        result = await summarizer.summarize_large_text("a" * 8000)

        assert result.ok
        assert result.provider_id == "recording"
        assert backend.calls == [("a" * 8000, "medium")]

    @pytest.mark.asyncio
    async def test_text_over_limit_is_chunked(self) -> None:
        backend = RecordingBackend()
        summarizer = Summarizer([backend], max_chars=8000, overlap=500)
        text = "a" * 7500 + "b" * 501
        await summarizer.summarize_large_text(text)

        chunk_calls = backend.calls[:2]
        assert [length for _, length in chunk_calls] == ["short", "short"]
        assert chunk_calls[0][0] == text[:8000]
        assert chunk_calls[1][0] == text[7500:]
        assert backend.calls[2][1] == "medium"
        assert len(backend.calls) == 3

    @pytest.mark.asyncio
    async def test_recursion_terminates_with_shrinking_backend(self) -> None:
        backend = RecordingBackend(ratio=0.2)
        summarizer = Summarizer([backend], max_chars=100, overlap=10, max_depth=5)
        result = await summarizer.summarize_large_text("x" * 5000)

        assert result.ok
        assert result.provider_id == "recording"
        assert len(result.summary) <= 100
        assert [length for _, length in backend.calls].count("medium") == 1
        assert backend.calls[-1][1] == "medium"
        assert len(backend.calls[-1][0]) <= 100

    @pytest.mark.asyncio
    async def test_depth_ceiling_truncates(self) -> None:
        backend = RecordingBackend(ratio=1.0)
        summarizer = Summarizer([backend], max_chars=100, overlap=10, max_depth=0)
        result = await summarizer.summarize_large_text("y" * 500)

        assert result.provider_id == "truncation"
        assert result.summary == "y" * 100
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_failed_chunks_are_skipped(self, make_client: Callable[..., Any]) -> None:
        client = make_client(
            "llm:openai",
            [
                ProviderResponse.failure(ErrorKind.PROVIDER_CALL_FAILED, "chunk 1 down"),
                "second chunk summary",
                "final summary",
            ],
        )
        summarizer = Summarizer([PromptSummaryBackend(client, "m")], max_chars=50, overlap=5)
        result = await summarizer.summarize_large_text("z" * 80)

        assert result.summary == "final summary"
        assert client.calls[2][1].prompt == "second chunk summary"

    @pytest.mark.asyncio
    async def test_all_chunks_failing_is_an_error(self) -> None:
        summarizer = Summarizer([RecordingBackend(fail=True)], max_chars=50, overlap=5)
        result = await summarizer.summarize_large_text("z" * 80)

        assert not result.ok
        assert result.error is ErrorKind.PROVIDER_CALL_FAILED
        assert result.message.startswith("Failed to summarize any chunks")

    @pytest.mark.asyncio
    async def test_failed_final_pass_returns_merged_summaries(
        self, make_client: Callable[..., Any]
    ) -> None:
        client = make_client(
            "llm:openai",
            ["one", "two", ProviderResponse.failure(ErrorKind.PROVIDER_CALL_FAILED, "down")],
        )
        summarizer = Summarizer([PromptSummaryBackend(client, "m")], max_chars=50, overlap=5)
        result = await summarizer.summarize_large_text("z" * 80)

        assert result.provider_id == "merged"
        assert result.summary == "one\n\ntwo"


class TestSummarize:
    @pytest.mark.asyncio
    async def test_falls_back_through_providers(self) -> None:
        failing = RecordingBackend(fail=True)
        working = RecordingBackend(ratio=0.5)
        summarizer = Summarizer([failing, working])
        result = await summarizer.summarize("abcdefgh")

        assert result.summary == "abcd"
        assert len(failing.calls) == 1

    @pytest.mark.asyncio
    async def test_all_providers_failing_uses_heuristic(self) -> None:
        text = (
            "The quarterly report shows steady growth in revenue. "
            "Operating costs fell for the second quarter in a row. "
            "Headcount remained flat across all departments. "
            "A dividend will be announced next month."
        )
        summarizer = Summarizer([RecordingBackend(fail=True), RecordingBackend(fail=True)])
        result = await summarizer.summarize(text, doc_type="report")

        assert result.provider_id == "heuristic"
        assert result.summary == heuristic_summary(text)

    @pytest.mark.asyncio
    async def test_no_backends_uses_heuristic(self) -> None:
        result = await Summarizer([]).summarize("")
        assert result.summary == "This is a document. No text content was extracted."

    def test_rejects_negative_depth(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            Summarizer([], max_depth=-1)
