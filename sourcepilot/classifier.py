"""Classify a clicked token into the reference kind that resolves it.

Rules are evaluated in order and the first one that fires wins: cheap
structural checks come before whole-document scans, and guessing that a
token names a class comes last.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .features import ResourceFeature
from .languages.base import LanguageSupport
from .logging import get_logger
from .models import (
    BareSymbol,
    ExternalCallOnVariable,
    ImportStatementSelf,
    InternalCall,
    PrimitiveType,
    ReferenceKind,
    ResolutionRequest,
    ResourceReference,
    SourceDocument,
    Unclassified,
    VariableUse,
)
from .parsing.common import parse_resource_name

# Highlighting class hosts give to identifiers in call position.
IDENTIFIER_CALL_CLASS = "pl-en"
LEGACY_MENU_MARKER = ".menu"

_WORD = re.compile(r"\w+")
_ACCESSOR = re.compile(r"\.(\w+)")
_VARIABLE = re.compile(r"(\w+)\??")


class TokenClassifier:
    """Assigns exactly one reference kind to each resolution request."""

    def __init__(self, support: LanguageSupport, features: Sequence[ResourceFeature]) -> None:
        self.support = support
        self.features = list(features)
        self.logger = get_logger("classifier")

    def matching_feature(self, request: ResolutionRequest) -> Optional[ResourceFeature]:
        for feature in self.features:
            if feature.is_match(request.token, request.context):
                return feature
        return None

    def classify(self, request: ResolutionRequest, document: SourceDocument) -> ReferenceKind:
        token = request.token.strip()
        context = request.context

        if self.support.is_primitive(token):
            return PrimitiveType(name=token.replace("?", ""))

        feature = self.matching_feature(request)
        if feature is not None:
            return ResourceReference(
                subkind=feature.subkind,
                name=feature.resource_name(token) or "",
            )

        if context.previous == LEGACY_MENU_MARKER:
            return ResourceReference(subkind="menu", name=parse_resource_name(token, "menu") or "")

        if self.support.is_import_line(context.line_text):
            return ImportStatementSelf()

        if self._is_internal_call(request):
            return InternalCall(method_name=token)

        if self._is_variable(request):
            return VariableUse(variable_name=token)

        external = self._external_call(request)
        if external is not None:
            return external

        if document.imports:
            return BareSymbol(name=token)

        self.logger.debug("No reference kind matched %r", token)
        return Unclassified()

    def _is_internal_call(self, request: ResolutionRequest) -> bool:
        context = request.context
        following = context.next
        previous = context.previous
        return (
            following is not None
            and following.startswith("(")
            and context.css_class != IDENTIFIER_CALL_CLASS
            and (previous is None or not previous.strip())
        )

    def _is_variable(self, request: ResolutionRequest) -> bool:
        context = request.context
        following = context.next_non_blank()
        return (
            context.css_class != IDENTIFIER_CALL_CLASS
            and _WORD.fullmatch(request.token.strip()) is not None
            and following is not None
            and following.startswith(".")
        )

    def _external_call(self, request: ResolutionRequest) -> Optional[ExternalCallOnVariable]:
        """Recognize ``variable.method(`` with the click on ``method``."""
        context = request.context
        token = request.token.strip()
        following = context.next_non_blank()
        if following is None or not following.startswith("("):
            return None

        accessor = _ACCESSOR.fullmatch(token)
        if accessor is not None:
            method_name = accessor.group(1)
            receiver = context.previous_non_blank()
        elif _WORD.fullmatch(token) and context.previous_non_blank() == ".":
            method_name = token
            receiver = context.previous_non_blank(2)
        else:
            return None

        if receiver is None:
            return None
        variable = _VARIABLE.fullmatch(receiver.strip())
        if variable is None:
            return None
        return ExternalCallOnVariable(variable_name=variable.group(1), method_name=method_name)


__all__ = ["IDENTIFIER_CALL_CLASS", "LEGACY_MENU_MARKER", "TokenClassifier"]
