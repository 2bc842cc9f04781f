import logging
import threading
from typing import Any

from pydantic import BaseModel, ValidationError

from spinn3r.log import TraceLogger
from spinn3r.log import logger as package_logger

from .config import DEFAULT_API_URL, USER_AGENT, FetchPolicy, RequestConfig
from .exceptions import ConfigurationError, FetchCancelled, StreamExhausted
from .feed import FeedParser, Page, RSSFeedParser
from .fetcher import Fetcher
from .querybuilder import build_first_url
from .transport import RequestsTransport, Transport


class PaginationState(BaseModel):
    """Cursor over the page currently being handed out."""

    next_url: str | None = None
    last_url: str | None = None
    current_page: Page | None = None
    cursor: int = 0
    pages_fetched: int = 0

    def retire_page(self):
        self.current_page = None
        self.cursor = 0


class Spinn3rClient:
    """
    Iterative interface to the Spinn3r API.

    ``next()`` returns one item at a time and fetches the next page, using
    the ``api:next_request_url`` returned with every response, once the
    current page is used up. ``next_feed()`` is the manual alternative: it
    returns the raw XML of one call and leaves ``next_url`` to the caller.
    The two should not be mixed.

    A client is not safe for concurrent use. Serialize access or use one
    client per stream.

    Example:
        client = Spinn3rClient(
            "permalink.getDelta",
            {"vendor": "acme", "limit": 5, "lang": "en"},
        )
        for item in client:
            print(item["title"])
    """

    def __init__(
        self,
        api: str | None,
        params: dict[str, Any] | None,
        *,
        api_url: str = DEFAULT_API_URL,
        retries: int = 5,
        retry_sleep: float = 30,
        timeout: float = 30,
        page_delay: float = 0,
        encode_params: bool = True,
        debug: bool | logging.Logger = False,
        transport: Transport | None = None,
        parser: FeedParser | None = None,
        cancel_event: threading.Event | None = None,
    ):
        """
        Initializes a Spinn3r client.

        Args:
            api (str): API method, e.g. ``permalink.getDelta`` or ``feed.getDelta``
            params (dict[str, Any]): Query parameters. ``vendor`` is required;
                ``version`` overrides the API version.
            api_url (str): Base API URL
            retries (int): HTTP attempts per page
            retry_sleep (float): Seconds to wait between attempts
            timeout (float): Connect/read timeout in seconds
            page_delay (float): Seconds to wait between automatic page fetches
            encode_params (bool): Percent-encode query parameter values
            debug (bool | logging.Logger): Trace requests of this client at
                DEBUG level, or send all records to the given logger
            transport (Transport): HTTP capability, defaults to requests
            parser (FeedParser): Feed parser, defaults to feedparser
            cancel_event (threading.Event): Shared cancellation event

        Raises:
            ConfigurationError: If ``api`` or the vendor key is missing.
        """
        try:
            self.config = RequestConfig(
                api_url=api_url,
                api=api or "",
                params=params or {},
                encode_params=encode_params,
            )
            self.policy = FetchPolicy(
                retries=retries,
                retry_sleep=retry_sleep,
                timeout=timeout,
                page_delay=page_delay,
            )
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        if isinstance(debug, logging.Logger):
            self.logger = TraceLogger(debug)
        else:
            self.logger = TraceLogger(
                package_logger.getChild(self.__class__.__name__), trace=debug
            )

        self.cancel_event = cancel_event or threading.Event()
        self.transport = transport or RequestsTransport(
            user_agent=USER_AGENT, logger=self.logger
        )
        self.parser = parser or RSSFeedParser(logger=self.logger)
        self.fetcher = Fetcher(
            self.transport, self.policy, self.logger, self.cancel_event
        )
        self.state = PaginationState()

    @property
    def version(self) -> str:
        """Version of the Spinn3r API being called."""
        return self.config.version

    @property
    def next_url(self) -> str | None:
        """The next API URL that will be fetched."""
        return self.state.next_url

    @next_url.setter
    def next_url(self, url: str | None):
        self.state.next_url = url

    @property
    def last_url(self) -> str | None:
        """The last API URL that was fetched."""
        return self.state.last_url

    def first_url(self) -> str:
        return build_first_url(self.config)

    def next_feed(self) -> bytes:
        """
        Fetches the raw XML of the next API call.

        Uses ``next_url`` if set, otherwise the first URL. ``next_url`` is
        not advanced; set it yourself between calls.
        """
        url = self.state.next_url or self.first_url()
        content = self.fetcher.fetch(url)
        self.state.last_url = url
        return content

    def next(self) -> Any:
        """
        Returns the next item of the stream.

        Raises:
            StreamExhausted: If a page has been used up and the API did not
                provide a continuation URL.
            FetchError: If the next page could not be fetched.
            ParseError: If the next page is not a readable feed.
        """
        state = self.state

        while True:
            if state.current_page is None:
                self._load_page()

            page = state.current_page
            if state.cursor < len(page.items):
                item = page.items[state.cursor]
                state.cursor += 1
                return item

            self.logger.debug(f"page exhausted: {state.last_url}")
            state.retire_page()

            if not page.items and state.next_url == state.last_url:
                raise StreamExhausted(
                    f"Empty page continues to itself: {state.last_url}"
                )

    def _load_page(self):
        state = self.state

        if state.pages_fetched and not state.next_url:
            raise StreamExhausted(
                f"No continuation URL after {state.last_url}"
            )
        if state.pages_fetched and self.policy.page_delay:
            if self.cancel_event.wait(self.policy.page_delay):
                raise FetchCancelled(
                    f"Cancelled before fetching {state.next_url}",
                    url=state.next_url,
                )

        content = self.next_feed()

        self.logger.debug(f"parsing: {state.last_url}")
        page = self.parser.parse(content)
        self.logger.debug(f"done parsing: {state.last_url}")

        state.current_page = page
        state.cursor = 0
        state.next_url = page.next_request_url
        state.pages_fetched += 1

    def cancel(self):
        """Interrupts pending and future fetches of this client."""
        self.cancel_event.set()

    def close(self):
        self.transport.close()

    def __iter__(self) -> "Spinn3rClient":
        return self

    def __next__(self) -> Any:
        try:
            return self.next()
        except StreamExhausted:
            raise StopIteration from None

    def __enter__(self) -> "Spinn3rClient":
        return self

    def __exit__(self, *exc_info):
        self.close()
