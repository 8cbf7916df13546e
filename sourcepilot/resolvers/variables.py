"""Track what a variable was assigned from."""

from __future__ import annotations

import re
from typing import Optional

from ..languages.base import LanguageSupport
from ..logging import get_logger

_SIMPLE_TYPE = re.compile(r"\w+")


class VariableTypeTracker:
    """Finds the type-like token a variable was declared with or assigned from."""

    def __init__(self, support: LanguageSupport) -> None:
        self.support = support
        self.logger = get_logger("resolvers.variables")

    def assigned_from(self, variable_name: str, full_text: str) -> Optional[str]:
        """Return the raw right-hand token bound to ``variable_name``, dotted or not."""
        for pattern in self.support.declared_type_patterns(variable_name):
            match = pattern.search(full_text)
            if match:
                return match.group("type")
        return None

    def find_declared_type(self, variable_name: str, full_text: str) -> Optional[str]:
        """Return the declared type when it is a bare word (no dots, no call)."""
        assigned = self.assigned_from(variable_name.strip().replace("?", ""), full_text)
        if assigned is None or _SIMPLE_TYPE.fullmatch(assigned) is None:
            self.logger.debug("%s is not bound to a class name (%r)", variable_name, assigned)
            return None
        return assigned


__all__ = ["VariableTypeTracker"]
