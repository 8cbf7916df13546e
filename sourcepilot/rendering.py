"""Split plain source lines into the sibling tokens a code host renders.

Code hosts wrap highlighted code in spans; after normalization every
whitespace run, identifier (with its leading ``.`` accessor and a trailing
``?``), literal and punctuation character is its own sibling. The engine
reasons about clicks in terms of those siblings.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .models import TokenContext

_TOKEN_PATTERN = re.compile(
    r"""
    \s+
    | \.?[A-Za-z_$][\w$]*\??
    | \d+(?:\.\d+)?[fFlLdD]?
    | "(?:[^"\\]|\\.)*"?
    | '(?:[^'\\]|\\.)*'?
    | .
    """,
    re.VERBOSE,
)


def split_line(text: str) -> List[str]:
    """Return the rendered tokens of ``text``; joining them yields ``text``."""
    return _TOKEN_PATTERN.findall(text)


def context_at(
    line_text: str,
    column: int,
    *,
    line_number: Optional[int] = None,
    css_class: Optional[str] = None,
) -> Optional[TokenContext]:
    """Return the context of the token covering the 0-based ``column``.

    Returns None when the column is outside the line or lands on whitespace.
    """
    siblings = split_line(line_text)
    offset = 0
    for index, token in enumerate(siblings):
        if offset <= column < offset + len(token):
            if not token.strip():
                return None
            return TokenContext(
                siblings=tuple(siblings),
                index=index,
                css_class=css_class,
                line_number=line_number,
            )
        offset += len(token)
    return None


def context_for(
    line_text: str,
    token: str,
    *,
    occurrence: int = 1,
    line_number: Optional[int] = None,
    css_class: Optional[str] = None,
) -> Optional[TokenContext]:
    """Return the context of the ``occurrence``-th sibling whose text is ``token``."""
    siblings = split_line(line_text)
    seen = 0
    for index, sibling in enumerate(siblings):
        if sibling == token:
            seen += 1
            if seen == occurrence:
                return TokenContext(
                    siblings=tuple(siblings),
                    index=index,
                    css_class=css_class,
                    line_number=line_number,
                )
    return None


__all__ = ["context_at", "context_for", "split_line"]
