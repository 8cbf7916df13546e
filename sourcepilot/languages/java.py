"""Java (.java) resolution rules."""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence

from .base import compile_all
from .kotlin import KotlinSupport

_MODIFIERS = (
    r"(?:(?:public|protected|private|static|final|abstract|synchronized|native|default)\s+)*"
)
# Statement keywords that can precede an identifier like a type does.
_NOT_KEYWORD = r"(?!(?:return|new|else|throw|case)\b)"
# A declared type: no spaces except after the commas of generic arguments.
_TYPE = rf"{_NOT_KEYWORD}[\w.<>\[\]?]+(?:\s*,\s*[\w.<>\[\]?]+)*"


class JavaSupport(KotlinSupport):
    file_extension = "java"
    primitive_types = frozenset(
        {
            "boolean",
            "byte",
            "char",
            "short",
            "int",
            "long",
            "float",
            "double",
            "void",
            "Boolean",
            "Byte",
            "Character",
            "Short",
            "Integer",
            "Long",
            "Float",
            "Double",
            "String",
            "Object",
        }
    )
    import_terminators = frozenset({";"})

    def import_statement(self, name: str) -> str:
        return f"import {name};"

    def method_pattern(self, method_name: str) -> str:
        name = re.escape(method_name)
        return rf"\s*{_MODIFIERS}(?:<[^>]+>\s+)?{_TYPE}\s+{name}\s*\(.*"

    def class_pattern(self, class_name: str) -> str:
        name = re.escape(class_name)
        return rf".*\b(?:interface|class|enum|record)\s+{name}\b.*"

    def declared_type_patterns(self, variable_name: str) -> Sequence[Pattern[str]]:
        name = re.escape(variable_name)
        return compile_all(
            (
                rf"\b{name}\s*=\s*new\s+(?P<type>[\w.]+)",
                rf"(?<![\w.]){_NOT_KEYWORD}(?P<type>[\w.]+)(?:<[^=;()]*>)?\s+{name}\s*[=;]",
            )
        )

    def declaration_pattern(self, variable_name: str) -> Optional[str]:
        name = re.escape(variable_name)
        return rf"\s*{_MODIFIERS}{_TYPE}\s+{name}\s*;.*"


__all__ = ["JavaSupport"]
