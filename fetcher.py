"""HTTP metadata probing for page resources."""

from datetime import timezone
from email.utils import parsedate_to_datetime

import httpx


DEFAULT_TIMEOUT = 30.0


class ResourceUnavailableError(Exception):
    """Raised when the host cannot serve a resource."""

    def __init__(self, host: str, path: str, reason: str = "") -> None:
        self.host = host
        self.path = path
        self.reason = reason
        message = f"{host}{path} is not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def build_url(host: str, path: str) -> str:
    """Join a host and an absolute resource path without doubling the '/'."""
    return f"{host.rstrip('/')}/{path.lstrip('/')}"


def fetch_metadata(
    host: str,
    path: str,
    method: str = "HEAD",
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.Response:
    """Request `path` from `host` and return the response.

    Any error status or transport failure is reported as
    ResourceUnavailableError so callers only deal with one failure type.
    """
    url = build_url(host, path)
    try:
        response = httpx.request(method, url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ResourceUnavailableError(host, path, f"HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise ResourceUnavailableError(host, path, str(e)) from e
    return response


def parse_http_date(value: str) -> int | None:
    """Convert an HTTP date header to epoch milliseconds."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    # "-0000" and zone-less dates are UTC, not local time
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def get_last_modified(response: httpx.Response | None) -> int | None:
    """Return the response's last-modified time in epoch milliseconds, if any."""
    if response is None:
        return None
    value = response.headers.get("last-modified")
    if not value:
        return None
    return parse_http_date(value)
