from datetime import date, datetime
from typing import Any
from urllib.parse import quote

from .config import RequestConfig

# ISO 8601 timestamps and tier ranges ("0:5") stay readable on the wire
SAFE_CHARS = ":,"


def format_value(value: Any) -> str:
    """Render a parameter value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def build_query(params: dict[str, Any], encode: bool = True) -> str:
    """
    Build the ``&key=value`` tail of a request URL.

    Args:
        params: Query parameters, serialized in insertion order.
        encode: Percent-encode keys and values. When False they are inserted
            verbatim.

    Returns:
        str: The query tail, empty if there are no parameters.
    """
    parts = []
    for key, value in params.items():
        text = format_value(value)
        if encode:
            key = quote(str(key), safe=SAFE_CHARS)
            text = quote(text, safe=SAFE_CHARS)
        parts.append(f"&{key}={text}")
    return "".join(parts)


def build_first_url(config: RequestConfig) -> str:
    """Build the URL of the first page of a stream."""
    url = f"{config.api_url}/{config.api}?version={config.version}"
    return url + build_query(config.params, encode=config.encode_params)
