"""Kotlin (.kt) resolution rules. ``JavaSupport`` builds on these."""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence

from .base import LanguageSupport, compile_all


class KotlinSupport(LanguageSupport):
    file_extension = "kt"
    primitive_types = frozenset(
        {"Boolean", "Long", "Float", "Double", "Char", "Int", "String"}
    )
    import_terminators = frozenset({"as"})

    def method_pattern(self, method_name: str) -> str:
        name = re.escape(method_name)
        return rf".*\bfun\s+(?:<[^>]+>\s*)?(?:[\w.]+\.)?{name}\s*\(.*"

    def class_pattern(self, class_name: str) -> str:
        name = re.escape(class_name)
        return rf".*\b(?:interface|class|object)\s+{name}\b.*"

    def declared_type_patterns(self, variable_name: str) -> Sequence[Pattern[str]]:
        name = re.escape(variable_name)
        return compile_all(
            (
                rf"\b(?:val|var)\s+{name}\s*:\s*(?P<type>[\w.]+)",
                rf"\b(?:val|var)\s+{name}\s*=\s*(?P<type>[\w.]+)",
                rf"^\s*{name}\s*=\s*(?P<type>[\w.]+)",
            )
        )

    def declaration_pattern(self, variable_name: str) -> Optional[str]:
        name = re.escape(variable_name)
        return rf".*\b(?:val|var)\s+{name}\b.*"


__all__ = ["KotlinSupport"]
