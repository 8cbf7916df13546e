"""GitHub URL helpers and the urllib-backed remote file collaborator."""

from __future__ import annotations

import re
from http.client import HTTPException
from typing import Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..logging import get_logger

_BLOB_PATTERN = re.compile(
    r"https?://(?:www\.)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)/blob/(?P<rest>.+)"
)
RAW_HOST = "https://raw.githubusercontent.com"


class FetchError(RuntimeError):
    """Raised when a remote file cannot be fetched."""


class RemoteFiles(Protocol):
    """Network collaborator used for link validation and secondary hops."""

    def exists(self, url: str) -> bool:
        ...

    def fetch_text(self, url: str) -> str:
        ...


def is_file_url(url: str) -> bool:
    return _BLOB_PATTERN.match(url) is not None


def strip_anchor(url: str) -> str:
    return url.split("#", 1)[0]


def with_line_anchor(url: str, line_number: int) -> str:
    return f"{strip_anchor(url)}#L{line_number}"


def raw_url(url: str) -> str:
    """Map a ``blob`` view URL to its raw-content URL; other URLs pass through."""
    stripped = strip_anchor(url)
    match = _BLOB_PATTERN.match(stripped)
    if match is None:
        return stripped
    return f"{RAW_HOST}/{match.group('owner')}/{match.group('repo')}/{match.group('rest')}"


class GitHubFiles:
    """Checks and fetches repository files over HTTP."""

    def __init__(self, *, request_timeout: Optional[float] = 10.0) -> None:
        self.request_timeout = request_timeout or 10.0
        self.logger = get_logger("hosts.github")

    def exists(self, url: str) -> bool:
        """Return True when ``url`` answers with HTTP 200.

        Any failure to reach the file (bad URL, HTTP error, broken response)
        counts as missing.
        """
        target = strip_anchor(url)
        if urlparse(target).scheme not in {"http", "https"}:
            self.logger.debug("Existence check skipped for non-HTTP url %s", url)
            return False
        try:
            request = Request(target, method="GET")
            with urlopen(request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                status = getattr(response, "status", 200)
        except HTTPError as exc:
            self.logger.debug("Existence check for %s failed with %s", url, exc.code)
            return False
        except URLError as exc:
            self.logger.warning("Existence check for %s failed: %s", url, exc.reason)
            return False
        except (HTTPException, ValueError) as exc:
            self.logger.warning("Existence check for %s failed: %s", url, exc)
            return False
        return status == 200

    def fetch_text(self, url: str) -> str:
        target = raw_url(url)
        if urlparse(target).scheme not in {"http", "https"}:
            raise FetchError(f"Refusing to fetch non-HTTP url '{url}'")
        try:
            request = Request(target, method="GET")
            with urlopen(request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            raise FetchError(f"Fetching {target} failed with status {exc.code}") from exc
        except URLError as exc:
            raise FetchError(f"Fetching {target} failed: {exc.reason}") from exc
        except (HTTPException, ValueError) as exc:
            raise FetchError(f"Fetching {target} failed: {exc}") from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(f"{target} is not valid UTF-8 text") from exc


__all__ = [
    "FetchError",
    "GitHubFiles",
    "RAW_HOST",
    "RemoteFiles",
    "is_file_url",
    "raw_url",
    "strip_anchor",
    "with_line_anchor",
]
