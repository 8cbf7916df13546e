"""Contract for language-specific resolution rules."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Pattern, Sequence

from ..models import TokenContext
from ..parsing.imports import is_import_line


class LanguageSupport(ABC):
    """Language-specific syntax the resolution engine relies on."""

    file_extension: str = ""
    primitive_types: FrozenSet[str] = frozenset()
    # Tokens that may follow the last segment of an import line.
    import_terminators: FrozenSet[str] = frozenset()

    def is_primitive(self, token: str) -> bool:
        return token.strip().replace("?", "") in self.primitive_types

    def is_import_line(self, line: str) -> bool:
        return is_import_line(line)

    def import_statement(self, name: str) -> str:
        """Render the import line that declares ``name``."""
        return f"import {name}"

    def is_clicked_on_end_class(self, context: TokenContext) -> bool:
        following = context.next_non_blank()
        return following is None or following.strip() in self.import_terminators

    @abstractmethod
    def method_pattern(self, method_name: str) -> str:
        """Whole-line pattern matching a declaration of ``method_name``."""

    @abstractmethod
    def class_pattern(self, class_name: str) -> str:
        """Whole-line pattern matching a class or interface declaration."""

    @abstractmethod
    def declared_type_patterns(self, variable_name: str) -> Sequence[Pattern[str]]:
        """Patterns whose ``type`` group captures what ``variable_name`` is bound to.

        Patterns are tried in order; the first one that matches anywhere in
        the document wins.
        """

    def declaration_pattern(self, variable_name: str) -> Optional[str]:
        """Whole-line pattern for a declaration without an initializer."""
        return None


def compile_all(patterns: Sequence[str]) -> Sequence[Pattern[str]]:
    return tuple(re.compile(pattern, re.MULTILINE) for pattern in patterns)


__all__ = ["LanguageSupport", "compile_all"]
