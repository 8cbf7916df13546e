"""Small parsers shared across languages."""

from __future__ import annotations

import re
from typing import Optional

_EXT_PATTERN = re.compile(r"\.(\w+)")


def file_extension(url: str) -> Optional[str]:
    """Return the extension of the file a URL points at, ignoring any anchor."""
    path = url.split("#", 1)[0].split("?", 1)[0]
    last_segment = path.rstrip("/").rsplit("/", 1)[-1]
    matches = _EXT_PATTERN.findall(last_segment)
    return matches[-1] if matches else None


def parse_resource_name(token: str, subkind: str) -> Optional[str]:
    """Extract ``name`` from tokens such as ``R.layout.name`` or ``.name``.

    Host renderers split ``R.layout.activity_main`` into separate tokens, so
    a click may land on the whole reference or only on ``.activity_main``.
    """
    match = re.search(rf"{re.escape(subkind)}\.(\w+)", token)
    if match:
        return match.group(1)
    bare = re.fullmatch(r"\.?(\w+)\)?", token.strip())
    return bare.group(1) if bare else None


__all__ = ["file_extension", "parse_resource_name"]
