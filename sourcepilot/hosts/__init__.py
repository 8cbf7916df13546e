"""Code-host specific URL helpers and remote file access."""

from .github import (
    FetchError,
    GitHubFiles,
    RemoteFiles,
    is_file_url,
    raw_url,
    strip_anchor,
    with_line_anchor,
)

__all__ = [
    "FetchError",
    "GitHubFiles",
    "RemoteFiles",
    "is_file_url",
    "raw_url",
    "strip_anchor",
    "with_line_anchor",
]
