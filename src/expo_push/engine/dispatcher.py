"""
Retrying Dispatcher - bounded concurrency and rate-limit retries.

Wraps a single request attempt with a shared concurrency gate and
exponential backoff for rate-limited responses.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from expo_push.config import ClientConfig, get_config
from expo_push.exceptions import ApiError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RetryingDispatcher:
    """
    Runs request attempts through a concurrency gate with retries.

    At most `max_concurrent_requests` operations run at once across every
    caller sharing the dispatcher. Only rate-limited ApiErrors are retried;
    every other exception, including cancellation, propagates immediately.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the dispatcher.

        Args:
            config: Client configuration. Uses global config if not provided.
            sleep: Awaitable used for backoff delays
        """
        self.config = config or get_config()
        self.max_retry_attempts = self.config.max_retry_attempts
        self.retry_min_timeout = self.config.retry_min_timeout
        self._gate = asyncio.Semaphore(self.config.max_concurrent_requests)
        self._sleep = sleep
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of operations currently holding a gate slot."""
        return self._in_flight

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """
        Decide whether a failed attempt is retried.

        Args:
            error: Exception raised by the attempt
            attempt: Number of retries already made

        Returns:
            True for a rate-limited ApiError while retries remain
        """
        return (
            isinstance(error, ApiError)
            and error.is_rate_limit_error
            and attempt < self.max_retry_attempts
        )

    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds before retry number `attempt` (1-indexed)."""
        return self.retry_min_timeout * (2 ** (attempt - 1))

    async def dispatch(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run an operation under the gate, retrying rate-limited failures.

        Args:
            operation: Zero-argument coroutine function performing one attempt

        Returns:
            The operation's result
        """
        async with self._gate:
            self._in_flight += 1
            try:
                return await self._run_with_retry(operation)
            finally:
                self._in_flight -= 1

    async def _run_with_retry(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            try:
                return await operation()
            except ApiError as e:
                if not self.should_retry(e, attempt):
                    raise

                attempt += 1
                delay = self.backoff_delay(attempt)
                logger.warning(
                    "rate_limited_retrying",
                    attempt=attempt,
                    max_retry_attempts=self.max_retry_attempts,
                    delay_seconds=delay,
                )
                await self._sleep(delay)
