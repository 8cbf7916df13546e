"""Tests for GitHub URL helpers and the HTTP collaborator."""

from __future__ import annotations

import io
from http.client import IncompleteRead
from urllib.error import HTTPError, URLError

import pytest

from sourcepilot.hosts import github
from sourcepilot.hosts.github import (
    FetchError,
    GitHubFiles,
    is_file_url,
    raw_url,
    strip_anchor,
    with_line_anchor,
)

BLOB = "https://github.com/acme/app/blob/master/app/src/main/java/com/app/Main.kt"


class _Response(io.BytesIO):
    def __init__(self, body: bytes = b"", status: int = 200) -> None:
        super().__init__(body)
        self.status = status


def test_url_helpers() -> None:
    assert is_file_url(BLOB)
    assert not is_file_url("https://github.com/acme/app/tree/master/app")
    assert strip_anchor(f"{BLOB}#L12") == BLOB
    assert with_line_anchor(f"{BLOB}#L12", 40) == f"{BLOB}#L40"


def test_raw_url_maps_blob_views() -> None:
    assert raw_url(f"{BLOB}#L3") == (
        "https://raw.githubusercontent.com/acme/app/master/app/src/main/java/com/app/Main.kt"
    )
    assert raw_url("https://example.com/file.kt#L3") == "https://example.com/file.kt"


def test_exists_reports_status(monkeypatch: pytest.MonkeyPatch) -> None:
    requested = []

    def fake_urlopen(request, timeout):
        requested.append((request.full_url, timeout))
        return _Response()

    monkeypatch.setattr(github, "urlopen", fake_urlopen)

    assert GitHubFiles(request_timeout=3).exists(f"{BLOB}#L1") is True
    assert requested == [(BLOB, 3)]


def test_exists_is_false_on_http_and_network_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(request, timeout):
        raise HTTPError(request.full_url, 404, "Not Found", hdrs=None, fp=None)

    monkeypatch.setattr(github, "urlopen", missing)
    assert GitHubFiles().exists(BLOB) is False

    def offline(request, timeout):
        raise URLError("no route")

    monkeypatch.setattr(github, "urlopen", offline)
    assert GitHubFiles().exists(BLOB) is False


def test_fetch_text_reads_raw_content(monkeypatch: pytest.MonkeyPatch) -> None:
    requested = []

    def fake_urlopen(request, timeout):
        requested.append(request.full_url)
        return _Response(b"class Main\n")

    monkeypatch.setattr(github, "urlopen", fake_urlopen)

    assert GitHubFiles().fetch_text(f"{BLOB}#L1") == "class Main\n"
    assert requested == [raw_url(BLOB)]


def test_fetch_text_wraps_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(request, timeout):
        raise HTTPError(request.full_url, 404, "Not Found", hdrs=None, fp=None)

    monkeypatch.setattr(github, "urlopen", missing)

    with pytest.raises(FetchError, match="404"):
        GitHubFiles().fetch_text(BLOB)


def test_fetch_text_refuses_non_http_urls() -> None:
    with pytest.raises(FetchError):
        GitHubFiles().fetch_text("file:///tmp/Main.kt")


def test_exists_is_false_for_relative_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    def unexpected(request, timeout):  # pragma: no cover - must not be reached
        raise AssertionError("no request expected")

    monkeypatch.setattr(github, "urlopen", unexpected)

    assert GitHubFiles().exists("app/src/main/java/com/app/Main.kt#L3") is False


def test_broken_responses_count_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    def truncated(request, timeout):
        raise IncompleteRead(b"cla", 10)

    monkeypatch.setattr(github, "urlopen", truncated)

    assert GitHubFiles().exists(BLOB) is False
    with pytest.raises(FetchError):
        GitHubFiles().fetch_text(BLOB)
