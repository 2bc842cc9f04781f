from .client import PaginationState, Spinn3rClient
from .config import FetchPolicy, RequestConfig
from .exceptions import (
    ConfigurationError,
    FetchCancelled,
    FetchError,
    ParseError,
    Spinn3rError,
    StreamExhausted,
)
from .feed import Page, RSSFeedParser
from .fetcher import Fetcher
from .querybuilder import build_first_url
from .transport import HttpResponse, RequestsTransport

__version__ = "2.1.3"

__all__ = [
    "Spinn3rClient",
    "PaginationState",
    "RequestConfig",
    "FetchPolicy",
    "Fetcher",
    "build_first_url",
    "HttpResponse",
    "RequestsTransport",
    "Page",
    "RSSFeedParser",
    "Spinn3rError",
    "ConfigurationError",
    "FetchError",
    "FetchCancelled",
    "ParseError",
    "StreamExhausted",
]
