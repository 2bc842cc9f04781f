import logging
from typing import Any, Protocol

import feedparser
from pydantic import BaseModel, Field

from spinn3r.log import logger as package_logger

from .exceptions import ParseError

API_NAMESPACE = "http://tailrank.com/ns/#api"
NEXT_REQUEST_URL = "next_request_url"


class Page(BaseModel):
    """One parsed API response."""

    items: list[Any] = Field(default_factory=list)
    next_request_url: str | None = None
    channel: dict[str, Any] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.items)


class FeedParser(Protocol):
    def parse(self, content: bytes) -> Page: ...


class RSSFeedParser:
    """
    Parses Spinn3r RSS responses with feedparser.

    Items are returned as ``feedparser`` entries. The continuation URL is
    the channel's ``api:next_request_url`` element, which feedparser stores
    under the document's namespace prefix (``api_next_request_url``).
    """

    def __init__(
        self, logger: logging.Logger | logging.LoggerAdapter | None = None
    ):
        self.logger = logger or package_logger.getChild(self.__class__.__name__)

    def parse(self, content: bytes) -> Page:
        parsed = feedparser.parse(content)

        if parsed.bozo and not parsed.entries and not parsed.feed:
            raise ParseError(f"Unreadable feed: {parsed.get('bozo_exception')}")
        if parsed.bozo:
            self.logger.warning(
                f"Feed is not well-formed, using what could be parsed: "
                f"{parsed.get('bozo_exception')}"
            )

        channel = dict(parsed.feed)
        return Page(
            items=list(parsed.entries),
            next_request_url=self._next_request_url(channel),
            channel=channel,
        )

    def _next_request_url(self, channel: dict[str, Any]) -> str | None:
        url = channel.get(f"api_{NEXT_REQUEST_URL}")
        if url is None:
            # Namespace declared under a different prefix
            for key, value in channel.items():
                if key.endswith(f"_{NEXT_REQUEST_URL}"):
                    url = value
                    break
        if not url:
            return None
        return str(url).strip() or None
