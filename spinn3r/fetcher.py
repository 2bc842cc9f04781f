import logging
import threading
import time

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from spinn3r.log import logger as package_logger

from .config import FetchPolicy
from .exceptions import FetchCancelled, FetchError
from .transport import Transport


class RetryableFetchError(FetchError):
    """A failed attempt worth repeating: 5xx, network failure or empty body."""

    pass


class Fetcher:
    """
    Fetches API pages with bounded retries.

    Client errors (4xx) abort immediately. Server errors, network failures
    and empty bodies are retried after ``policy.retry_sleep`` seconds until
    ``policy.retries`` attempts have been made.
    """

    def __init__(
        self,
        transport: Transport,
        policy: FetchPolicy | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        cancel_event: threading.Event | None = None,
    ):
        """
        Initializes a fetcher.

        Args:
            transport (Transport): HTTP capability used for every attempt
            policy (FetchPolicy): Retry policy, defaults to FetchPolicy()
            logger (logging.Logger): Receives the trace of each attempt
            cancel_event (threading.Event): Once set, pending and future
                fetches raise FetchCancelled
        """
        self.transport = transport
        self.policy = policy if policy else FetchPolicy()
        self.logger = logger or package_logger.getChild(self.__class__.__name__)
        self.cancel_event = cancel_event

    def fetch(self, url: str) -> bytes:
        """
        Fetches the body of ``url``.

        Raises:
            FetchError: On a 4xx response or when all attempts failed.
            FetchCancelled: When the cancellation event is set.
        """
        attempts = 0

        def before(retry_state: RetryCallState):
            nonlocal attempts
            attempts = retry_state.attempt_number
            self._check_cancelled(url, attempts - 1)
            self.logger.debug(f"fetching: {url}")

        def sleep(seconds: float):
            if self.cancel_event is None:
                time.sleep(seconds)
            elif self.cancel_event.wait(seconds):
                raise FetchCancelled(
                    f"Fetch of {url} cancelled", url=url, attempts=attempts
                )

        retrying = Retrying(
            stop=stop_after_attempt(self.policy.retries),
            wait=wait_fixed(self.policy.retry_sleep),
            retry=retry_if_exception_type(RetryableFetchError),
            sleep=sleep,
            before=before,
            before_sleep=self._before_sleep,
            retry_error_callback=self._give_up,
        )
        return retrying(lambda: self._attempt(url, attempts))

    def _attempt(self, url: str, attempt: int) -> bytes:
        response = self.transport.get(url, timeout=self.policy.timeout)

        if response.ok and response.content:
            self.logger.debug(
                f"fetched on try {attempt} - length {len(response.content)}"
            )
            return response.content

        status = response.status_line if not response.ok else "empty response"
        self.logger.debug(status)

        error = RetryableFetchError
        if response.is_client_error:
            error = FetchError
        raise error(
            f"Unable to fetch from spinn3r: {url} ({status})",
            url=url,
            status_code=response.status_code,
            attempts=attempt,
        )

    def _before_sleep(self, retry_state: RetryCallState):
        error = retry_state.outcome.exception()
        self.logger.warning(
            f"Attempt {retry_state.attempt_number} for {error.url} failed, retrying"
        )
        self.logger.debug(f"sleeping for {self.policy.retry_sleep} seconds...")

    def _give_up(self, retry_state: RetryCallState) -> bytes:
        error = retry_state.outcome.exception()
        self.logger.error(
            f"Giving up on {error.url} after {retry_state.attempt_number} attempts"
        )
        raise FetchError(
            f"Unable to fetch from spinn3r: {error.url}",
            url=error.url,
            status_code=error.status_code,
            attempts=retry_state.attempt_number,
        ) from error

    def _check_cancelled(self, url: str, attempts: int):
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise FetchCancelled(
                f"Fetch of {url} cancelled", url=url, attempts=attempts
            )
