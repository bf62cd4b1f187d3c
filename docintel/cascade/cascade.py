"""Ordered "first success wins" runner shared by every provider cascade.

Extraction, summarization and suggestion generation all walk an ordered list
of providers; each step reports a normalized Outcome and the runner stops at
the first Success. Attempts are strictly sequential.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

from docintel.logging.logger import Log
from docintel.providers.models import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class SoftFailure:
    kind: ErrorKind
    message: str = ""


Outcome = Union[Success[T], SoftFailure]


@dataclass(frozen=True)
class ProviderAttempt:
    """One cascade attempt, kept for logging and diagnostics only."""

    provider_id: str
    ok: bool
    error_kind: ErrorKind | None = None
    message: str = ""
    latency_ms: float = 0.0


@dataclass(frozen=True)
class CascadeStep(Generic[T]):
    provider_id: str
    call: Callable[[], Awaitable[Outcome[T]]]


@dataclass(frozen=True)
class CascadeResult(Generic[T]):
    value: T | None = None
    provider_id: str | None = None
    attempts: list[ProviderAttempt] = field(default_factory=list)
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed_attempts(self) -> list[ProviderAttempt]:
        return [a for a in self.attempts if not a.ok]


async def first_success(
    steps: Sequence[CascadeStep[T]],
    *,
    timeout_seconds: float | None = None,
    label: str = "cascade",
) -> CascadeResult[T]:
    """Run steps in order until one succeeds.

    A step that returns SoftFailure, raises, or exceeds timeout_seconds is
    recorded as a failed attempt and the next step runs. When every step
    fails, the result carries the last failure kind and all messages.
    """
    attempts: list[ProviderAttempt] = []
    last_kind = ErrorKind.PROVIDER_UNAVAILABLE
    messages: list[str] = []

    for step in steps:
        started = time.monotonic()
        outcome = await _run_step(step, timeout_seconds)
        latency_ms = (time.monotonic() - started) * 1000

        if isinstance(outcome, Success):
            attempts.append(
                ProviderAttempt(provider_id=step.provider_id, ok=True, latency_ms=latency_ms)
            )
            Log.info(
                f"{label}: provider succeeded",
                provider=step.provider_id,
                latency_ms=round(latency_ms),
            )
            return CascadeResult(
                value=outcome.value,
                provider_id=step.provider_id,
                attempts=attempts,
            )

        attempts.append(
            ProviderAttempt(
                provider_id=step.provider_id,
                ok=False,
                error_kind=outcome.kind,
                message=outcome.message,
                latency_ms=latency_ms,
            )
        )
        last_kind = outcome.kind
        messages.append(f"{step.provider_id}: {outcome.message or outcome.kind.value}")
        Log.warning(
            f"{label}: provider failed: {outcome.message}",
            provider=step.provider_id,
            error=outcome.kind.value,
            latency_ms=round(latency_ms),
        )

    if not steps:
        messages.append("no providers configured")
    Log.warning(f"{label}: all providers exhausted")
    return CascadeResult(attempts=attempts, error=last_kind, message="; ".join(messages))


async def _run_step(step: CascadeStep[T], timeout_seconds: float | None) -> Outcome[T]:
    try:
        if timeout_seconds is None:
            return await step.call()
        return await asyncio.wait_for(step.call(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        return SoftFailure(
            ErrorKind.PROVIDER_CALL_FAILED, f"timed out after {timeout_seconds}s"
        )
    except Exception as exc:
        return SoftFailure(ErrorKind.PROVIDER_CALL_FAILED, f"{type(exc).__name__}: {exc}")
