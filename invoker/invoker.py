"""
Resilient Invoker.

Turns one user-initiated "generate" action into exactly one terminal
GenerationResult, masking transient gateway/upstream failures with
bounded retries.

Flow per operation:
  Idle → Attempting(1) → Success
                       → BackingOff → Attempting(2) → ...
                       → Failure   (validation, or attempt cap reached)

Guarantees:
- Validation failures make zero network calls
- At most `max_attempts` calls, strictly sequential
- Backoff after attempt n: 2**n s + uniform(0, 0.5 s)
- Never raises to the caller (asyncio cancellation excepted)
"""

import asyncio
import logging
import random
import time
from typing import Awaitable, Callable, List, Optional

from .backoff import backoff_delay
from .base import GatewayTransport
from .errors import GenerationTimeoutError, InvocationError, ValidationError
from .types import (
    Attempt,
    Failure,
    GenerationRequest,
    GenerationResult,
    InvokerState,
    Success,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S: float = 30.0
DEFAULT_MAX_ATTEMPTS: int = 3

SleepFn = Callable[[float], Awaitable[None]]


class ResilientInvoker:
    """
    Retry/backoff/timeout wrapper around a GatewayTransport.

    Usage:
        invoker = ResilientInvoker(HttpGatewayTransport("http://localhost:5000"))
        result = await invoker.generate("a red fox", "img3")

    The invoker holds no per-operation state; concurrent calls to
    generate() run independently.
    """

    def __init__(
        self,
        transport: GatewayTransport,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Optional[SleepFn] = None,
        rng: Optional[random.Random] = None,
    ):
        _check_limits(timeout_s, max_attempts)
        self.transport = transport
        self.timeout_s = timeout_s
        self.max_attempts = max_attempts
        self._sleep = sleep or asyncio.sleep
        self._rng = rng

    async def generate(
        self,
        prompt: Optional[str],
        model: Optional[str],
        timeout_s: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> GenerationResult:
        """
        Run one logical generate operation.

        Args:
            prompt: Raw user prompt (trimmed here).
            model: Model identifier from SUPPORTED_MODELS.
            timeout_s: Per-attempt timeout override.
            max_attempts: Attempt cap override.

        Returns:
            Success(url, attempts) or Failure(kind, message, attempts).
        """
        timeout_s = self.timeout_s if timeout_s is None else timeout_s
        max_attempts = self.max_attempts if max_attempts is None else max_attempts
        _check_limits(timeout_s, max_attempts)

        try:
            request = GenerationRequest.create(prompt, model)
        except ValidationError as e:
            logger.info(f"Rejected generation request: {e}")
            return Failure(kind=ValidationError.kind, message=str(e), attempts=0)

        attempts: List[Attempt] = []
        last_error: Optional[BaseException] = None

        for number in range(1, max_attempts + 1):
            attempt = self._start_attempt(number, timeout_s)
            attempts.append(attempt)
            _log_state(InvokerState.ATTEMPTING, attempt=number, model=request.model)

            try:
                url = await asyncio.wait_for(self.transport.send(request), timeout=timeout_s)
            except asyncio.TimeoutError:
                last_error = GenerationTimeoutError(timeout_s)
            except InvocationError as e:
                last_error = e
            except Exception as e:
                logger.error(f"Unexpected transport error on attempt {number}", exc_info=True)
                last_error = e
            else:
                attempt.outcome = "success"
                _log_state(InvokerState.SUCCESS, attempt=number, model=request.model)
                logger.info(f"Image generated after {number} attempt(s)")
                return Success(url=url, attempts=number)

            final = number == max_attempts
            attempt.outcome = "fatal_failure" if final else "retryable_failure"
            attempt.error = str(last_error)

            if final:
                break

            delay = backoff_delay(number, rng=self._rng)
            logger.warning(
                f"Attempt {number}/{max_attempts} failed: {last_error}; retrying in {delay:.2f}s",
                extra={"attempt": number, "error_kind": _kind_of(last_error), "delay_s": delay},
            )
            _log_state(InvokerState.BACKING_OFF, attempt=number, model=request.model)
            await self._sleep(delay)

        failure = Failure(
            kind=_kind_of(last_error),
            message=f"Failed to generate image after {len(attempts)} attempt(s): {last_error}",
            attempts=len(attempts),
        )
        _log_state(InvokerState.FAILURE, attempt=len(attempts), model=request.model)
        logger.error(failure.message, extra={"error_kind": failure.kind})
        return failure

    @staticmethod
    def _start_attempt(number: int, timeout_s: float) -> Attempt:
        started = time.monotonic()
        return Attempt(number=number, started_at=started, deadline=started + timeout_s)


def _check_limits(timeout_s: float, max_attempts: int) -> None:
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    if timeout_s <= 0:
        raise ValueError(f"timeout_s must be > 0, got {timeout_s}")


def _kind_of(error: Optional[BaseException]) -> str:
    if isinstance(error, InvocationError):
        return error.kind
    return InvocationError.kind


def _log_state(state: InvokerState, **context) -> None:
    logger.debug(f"Invoker state -> {state.value}", extra={"invoker_state": state.value, **context})
