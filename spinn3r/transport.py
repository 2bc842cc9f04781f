import logging
from typing import Protocol

import requests
from pydantic import BaseModel

from spinn3r.log import logger as package_logger


class HttpResponse(BaseModel):
    """Outcome of a single GET. ``status_code`` is None on network failure."""

    status_code: int | None = None
    reason: str = ""
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500

    @property
    def status_line(self) -> str:
        if self.status_code is None:
            return self.reason
        return f"{self.status_code} {self.reason}".strip()


class Transport(Protocol):
    def get(self, url: str, timeout: float) -> HttpResponse: ...

    def close(self) -> None: ...


class RequestsTransport:
    """
    HTTP transport backed by a ``requests`` session.

    Network-level failures (connection errors, timeouts) are reported as an
    ``HttpResponse`` without status code instead of raising, so the fetcher
    can treat them as retryable.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.session = requests.Session()
        if user_agent:
            self.session.headers["User-Agent"] = user_agent
        self.logger = logger or package_logger.getChild(self.__class__.__name__)

    def get(self, url: str, timeout: float) -> HttpResponse:
        try:
            response = self.session.get(url, timeout=timeout)
        except requests.RequestException as e:
            self.logger.debug(f"Request to {url} failed: {e}")
            return HttpResponse(reason=str(e))

        return HttpResponse(
            status_code=response.status_code,
            reason=response.reason or "",
            content=response.content,
        )

    def close(self) -> None:
        self.session.close()
