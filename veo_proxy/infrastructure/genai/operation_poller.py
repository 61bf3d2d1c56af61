"""Bounded polling of long-running generation operations."""

import asyncio
import logging
import time
from typing import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ...domain.entities.operation_status import (
    FailedStatus,
    OperationStatus,
    SucceededStatus,
)
from ...domain.interfaces.video_generator import (
    ContractError,
    GenerationTimeoutError,
    SubmissionError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_ATTEMPTS = 60

StatusFetcher = Callable[[str], Awaitable[OperationStatus]]


def _is_pending(status: OperationStatus) -> bool:
    return not status.done


def _last_status(retry_state: RetryCallState) -> OperationStatus:
    """Hand back the final status instead of raising RetryError."""
    return retry_state.outcome.result()


class OperationPoller:
    """
    Drives an operation handle to a terminal status.

    Each attempt is a single status fetch. Between attempts the poller sleeps
    a fixed interval, so a job that never finishes costs exactly
    ``max_attempts`` fetches and ``max_attempts - 1`` sleeps.
    Errors raised by the fetcher are not retried.
    """

    def __init__(
        self,
        fetch_status: StatusFetcher,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._fetch_status = fetch_status
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts
        self._sleep = sleep

    async def wait(self, operation_name: str) -> str:
        """
        Poll an operation until it finishes or the attempt budget runs out.

        Args:
            operation_name: Handle returned by the submission call

        Returns:
            URI of the generated video

        Raises:
            SubmissionError: If the handle is empty
            GenerationTimeoutError: If the job is still pending after the last attempt
            UpstreamError: If the job finished with an error payload
            ContractError: If the job succeeded without a video URI
        """
        if not operation_name:
            raise SubmissionError("Operation did not return a name")

        logger.info(
            f"Polling operation {operation_name} "
            f"(every {self._poll_interval}s, max {self._max_attempts} attempts)..."
        )
        start_time = time.monotonic()
        attempts = 0

        async def _fetch(name: str) -> OperationStatus:
            nonlocal attempts
            attempts += 1
            return await self._fetch_status(name)

        retrying = AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_fixed(self._poll_interval),
            retry=retry_if_result(_is_pending),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            retry_error_callback=_last_status,
        )
        status = await retrying(_fetch, operation_name)
        elapsed = time.monotonic() - start_time

        if not status.done:
            logger.warning(
                f"Operation {operation_name} still running after {attempts} attempts "
                f"({int(elapsed)}s); giving up"
            )
            raise GenerationTimeoutError("Video generation timeout")

        logger.info(f"Operation {operation_name} finished after {attempts} attempt(s) in {int(elapsed)}s")

        if isinstance(status, FailedStatus):
            logger.error(f"Operation {operation_name} failed: {status.message}")
            raise UpstreamError(status.message or "Unknown error")

        if not isinstance(status, SucceededStatus) or not status.video_uri:
            raise ContractError("No video URI returned")

        return status.video_uri
