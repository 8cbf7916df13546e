"""Package and import declaration parsing.

Only top-level declarations matter, so parsing is a line-by-line pattern
match; no brace or scope tracking is attempted.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import ImportStatement, ParsedImports

IMPORT_PATTERN = re.compile(
    r"\s*import\s+(?:static\s+)?(?P<name>[\w.]+(?:\.\*)?)"
    r"(?:\s+as\s+(?P<alias>\w+))?\s*;?\s*"
)
PACKAGE_PATTERN = re.compile(r"\s*package\s+(?P<name>[\w.]+)\s*;?\s*")


def is_import_line(line: str) -> bool:
    return IMPORT_PATTERN.fullmatch(line) is not None


def parse_import_package(line: str) -> Optional[str]:
    """Return the fully-qualified name declared by an import line."""
    match = IMPORT_PATTERN.fullmatch(line)
    return match.group("name") if match else None


def parse_imports(text: str) -> ParsedImports:
    """Extract the package declaration and every import, in source order."""
    package_name = ""
    statements: List[ImportStatement] = []
    for line in text.splitlines():
        if not package_name:
            package_match = PACKAGE_PATTERN.fullmatch(line)
            if package_match:
                package_name = package_match.group("name")
                continue
        match = IMPORT_PATTERN.fullmatch(line)
        if match is None:
            continue
        statements.append(
            ImportStatement(
                fully_qualified_name=match.group("name"),
                alias=match.group("alias"),
            )
        )
    return ParsedImports(package_name=package_name, statements=tuple(statements))


__all__ = [
    "IMPORT_PATTERN",
    "PACKAGE_PATTERN",
    "is_import_line",
    "parse_import_package",
    "parse_imports",
]
