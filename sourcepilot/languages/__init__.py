"""Language supports keyed by file extension."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from ..parsing.common import file_extension
from .base import LanguageSupport
from .java import JavaSupport
from .kotlin import KotlinSupport

_SUPPORTS: Dict[str, Callable[[], LanguageSupport]] = {
    "kt": KotlinSupport,
    "kts": KotlinSupport,
    "java": JavaSupport,
}


def support_for_url(url: str) -> Optional[LanguageSupport]:
    """Return the language support for the file ``url`` points at, if any."""
    extension = file_extension(url)
    if extension is None:
        return None
    factory = _SUPPORTS.get(extension.lower())
    return factory() if factory is not None else None


__all__ = ["JavaSupport", "KotlinSupport", "LanguageSupport", "support_for_url"]
