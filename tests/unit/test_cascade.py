import asyncio

import pytest

from docintel.cascade.cascade import CascadeStep, Outcome, SoftFailure, Success, first_success
from docintel.providers.models import ErrorKind


def _step(provider_id: str, outcome: Outcome[str], calls: list[str]) -> CascadeStep[str]:
    async def call() -> Outcome[str]:
        calls.append(provider_id)
        return outcome

    return CascadeStep(provider_id=provider_id, call=call)


class TestFirstSuccess:
    @pytest.mark.asyncio
    async def test_first_success_wins_after_two_failures(self) -> None:
        calls: list[str] = []
        steps = [
            _step("a", SoftFailure(ErrorKind.PROVIDER_CALL_FAILED, "down"), calls),
            _step("b", SoftFailure(ErrorKind.PARSE_ERROR, "bad json"), calls),
            _step("c", Success("from c"), calls),
            _step("d", Success("from d"), calls),
        ]
        result = await first_success(steps)
        assert result.ok
        assert result.value == "from c"
        assert result.provider_id == "c"
        assert calls == ["a", "b", "c"]
        assert [a.ok for a in result.attempts] == [False, False, True]
        assert len(result.failed_attempts) == 2
        assert result.attempts[1].error_kind is ErrorKind.PARSE_ERROR

    @pytest.mark.asyncio
    async def test_exhaustion_reports_last_kind_and_all_messages(self) -> None:
        calls: list[str] = []
        steps = [
            _step("a", SoftFailure(ErrorKind.PROVIDER_UNAVAILABLE, "no key"), calls),
            _step("b", SoftFailure(ErrorKind.EMPTY_EXTRACTION), calls),
        ]
        result = await first_success(steps)
        assert not result.ok
        assert result.value is None
        assert result.error is ErrorKind.EMPTY_EXTRACTION
        assert result.message == "a: no key; b: empty_extraction"

    @pytest.mark.asyncio
    async def test_no_steps_is_unavailable(self) -> None:
        result = await first_success([])
        assert result.error is ErrorKind.PROVIDER_UNAVAILABLE
        assert "no providers configured" in result.message

    @pytest.mark.asyncio
    async def test_exception_is_soft_failure(self) -> None:
        async def explode() -> Outcome[str]:
            raise RuntimeError("kaboom")

        calls: list[str] = []
        result = await first_success(
            [CascadeStep("a", explode), _step("b", Success("ok"), calls)]
        )
        assert result.value == "ok"
        assert result.attempts[0].error_kind is ErrorKind.PROVIDER_CALL_FAILED
        assert "RuntimeError: kaboom" in result.attempts[0].message

    @pytest.mark.asyncio
    async def test_timeout_is_soft_failure(self) -> None:
        async def slow() -> Outcome[str]:
            await asyncio.sleep(5)
            return Success("late")

        calls: list[str] = []
        result = await first_success(
            [CascadeStep("slow", slow), _step("fast", Success("ok"), calls)],
            timeout_seconds=0.01,
        )
        assert result.provider_id == "fast"
        assert "timed out" in result.attempts[0].message

    @pytest.mark.asyncio
    async def test_steps_run_sequentially(self) -> None:
        events: list[str] = []

        def make(name: str) -> CascadeStep[str]:
            async def call() -> Outcome[str]:
                events.append(f"start {name}")
                await asyncio.sleep(0)
                events.append(f"end {name}")
                return SoftFailure(ErrorKind.PROVIDER_CALL_FAILED)

            return CascadeStep(name, call)

        await first_success([make("a"), make("b")])
        assert events == ["start a", "end a", "start b", "end b"]
