"""Core data models shared across sourcepilot components."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Iterable, Optional, Protocol, Sequence, Tuple, Union


@dataclass(frozen=True)
class CodeLine:
    """A visible line of code and the line number the host anchors it with."""

    line_number: int
    text: str


@dataclass(frozen=True)
class ImportStatement:
    """A single import declared at the top of a source file."""

    fully_qualified_name: str
    alias: Optional[str] = None

    def matches(self, symbol: str) -> bool:
        """Return True when the import declares ``symbol`` by suffix or alias."""
        if self.alias is not None and self.alias == symbol:
            return True
        return self.fully_qualified_name.endswith(f".{symbol}")


@dataclass(frozen=True)
class ParsedImports:
    """Package declaration and imports of a file, in source order."""

    package_name: str
    statements: Tuple[ImportStatement, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.statements)

    def matching(self, symbol: str) -> list[ImportStatement]:
        return [statement for statement in self.statements if statement.matches(symbol)]


class SourceProvider(Protocol):
    """Host collaborator exposing the rendered file."""

    def get_full_text(self) -> str:
        ...

    def get_lines(self) -> Sequence[CodeLine]:
        ...

    def get_current_url(self) -> str:
        ...


@dataclass(frozen=True)
class SourceDocument:
    """Immutable snapshot of one page view.

    ``snapshot_id`` identifies the activation; asynchronous results tagged
    with a different id are stale and must be dropped.
    """

    url: str
    full_text: str
    lines: Tuple[CodeLine, ...]
    snapshot_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_text(cls, text: str, url: str) -> "SourceDocument":
        """Build a document numbering lines from 1, as code hosts do."""
        lines = tuple(
            CodeLine(line_number=index, text=line)
            for index, line in enumerate(text.splitlines(), start=1)
        )
        return cls(url=url, full_text=text, lines=lines)

    @classmethod
    def from_provider(cls, provider: SourceProvider) -> "SourceDocument":
        return cls(
            url=provider.get_current_url(),
            full_text=provider.get_full_text(),
            lines=tuple(provider.get_lines()),
        )

    @classmethod
    def from_lines(cls, lines: Iterable[CodeLine], url: str) -> "SourceDocument":
        ordered = tuple(lines)
        return cls(url=url, full_text="\n".join(line.text for line in ordered), lines=ordered)

    @cached_property
    def imports(self) -> ParsedImports:
        from .parsing.imports import parse_imports

        return parse_imports(self.full_text)

    @property
    def package_name(self) -> str:
        return self.imports.package_name


@dataclass(frozen=True)
class TokenContext:
    """Structural context of a clicked token inside its rendered line.

    ``siblings`` are the rendered tokens of the containing line, in order;
    ``index`` points at the clicked one. ``css_class`` carries the host's
    syntax-highlighting class for the token when known.
    """

    siblings: Tuple[str, ...]
    index: int
    css_class: Optional[str] = None
    line_number: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 <= self.index < len(self.siblings):
            raise ValueError(
                f"Token index {self.index} outside of {len(self.siblings)} siblings"
            )

    @property
    def token(self) -> str:
        return self.siblings[self.index]

    @property
    def line_text(self) -> str:
        return "".join(self.siblings)

    @property
    def previous(self) -> Optional[str]:
        return self.siblings[self.index - 1] if self.index > 0 else None

    @property
    def next(self) -> Optional[str]:
        if self.index + 1 < len(self.siblings):
            return self.siblings[self.index + 1]
        return None

    @property
    def preceding(self) -> Tuple[str, ...]:
        return self.siblings[: self.index]

    def previous_non_blank(self, offset: int = 1) -> Optional[str]:
        """Return the ``offset``-th non-blank sibling before the token."""
        seen = 0
        for text in reversed(self.siblings[: self.index]):
            if text.strip():
                seen += 1
                if seen == offset:
                    return text
        return None

    def next_non_blank(self) -> Optional[str]:
        for text in self.siblings[self.index + 1 :]:
            if text.strip():
                return text
        return None


# Reference kinds ----------------------------------------------------------


@dataclass(frozen=True)
class ResourceReference:
    subkind: str
    name: str


@dataclass(frozen=True)
class ImportStatementSelf:
    pass


@dataclass(frozen=True)
class InternalCall:
    method_name: str


@dataclass(frozen=True)
class VariableUse:
    variable_name: str


@dataclass(frozen=True)
class ExternalCallOnVariable:
    variable_name: str
    method_name: str


@dataclass(frozen=True)
class BareSymbol:
    name: str


@dataclass(frozen=True)
class PrimitiveType:
    name: str


@dataclass(frozen=True)
class Unclassified:
    pass


ReferenceKind = Union[
    ResourceReference,
    ImportStatementSelf,
    InternalCall,
    VariableUse,
    ExternalCallOnVariable,
    BareSymbol,
    PrimitiveType,
    Unclassified,
]


# Results ------------------------------------------------------------------


@dataclass(frozen=True)
class NavigationTarget:
    """Where a click should go. ``url is None`` means not clickable."""

    url: Optional[str]
    open_in_new_tab: bool = False

    @property
    def clickable(self) -> bool:
        return self.url is not None

    @classmethod
    def none(cls, open_in_new_tab: bool = False) -> "NavigationTarget":
        return cls(url=None, open_in_new_tab=open_in_new_tab)


class ResolutionStatus(str, Enum):
    RESOLVED = "resolved"
    UNCLASSIFIED = "unclassified"
    PRIMITIVE = "primitive"
    AMBIGUOUS_DEFINITION = "ambiguous_definition"
    UNRESOLVED_IMPORT = "unresolved_import"
    UNRESOLVED_DEFINITION = "unresolved_definition"
    DENIED_IMPORT = "denied_import"
    DEAD_LINK = "dead_link"


@dataclass(frozen=True)
class ResolutionRequest:
    """A single click (or hover) to resolve against the active document."""

    token: str
    context: TokenContext
    snapshot_id: Optional[str] = None

    @classmethod
    def for_context(
        cls, context: TokenContext, snapshot_id: Optional[str] = None
    ) -> "ResolutionRequest":
        return cls(token=context.token, context=context, snapshot_id=snapshot_id)


@dataclass(frozen=True)
class Refinement:
    """Secondary hop: fetch ``fetch_url`` and anchor the first line matching ``pattern``."""

    fetch_url: str
    pattern: str


@dataclass(frozen=True)
class Resolution:
    """Immediate best-effort target plus an optional refinement stage."""

    target: NavigationTarget
    kind: ReferenceKind
    status: ResolutionStatus
    diagnostic: Optional[str] = None
    refinement: Optional[Refinement] = None
    snapshot_id: Optional[str] = None


__all__ = [
    "BareSymbol",
    "CodeLine",
    "ExternalCallOnVariable",
    "ImportStatement",
    "ImportStatementSelf",
    "InternalCall",
    "NavigationTarget",
    "ParsedImports",
    "PrimitiveType",
    "ReferenceKind",
    "Refinement",
    "Resolution",
    "ResolutionRequest",
    "ResolutionStatus",
    "ResourceReference",
    "SourceDocument",
    "SourceProvider",
    "TokenContext",
    "Unclassified",
    "VariableUse",
]
