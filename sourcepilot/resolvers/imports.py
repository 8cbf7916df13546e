"""Resolve class names and import lines to repository file URLs."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence, Tuple

from ..hosts.github import strip_anchor, with_line_anchor
from ..languages.base import LanguageSupport
from ..locator import LineLocator
from ..logging import get_logger
from ..models import NavigationTarget, ResolutionStatus, SourceDocument, TokenContext
from ..parsing.common import file_extension
from ..parsing.imports import parse_import_package

# Definitions under these prefixes live outside the hosted repository.
DEFAULT_DENIED_PREFIXES: Tuple[str, ...] = (
    "android.",
    "java.",
    "androidx.",
    "kotlinx.android.synthetic.",
    "com.google.android.material.",
)
DATA_BINDING_IMPORT = re.compile(r".*\.databinding\..+Binding")
_QUALIFIED_NAME = re.compile(r"\w+(?:\.\w+)*")

ClassResolution = Tuple[NavigationTarget, ResolutionStatus]


class ImportResolver:
    """Turns symbols into file URLs using the document's imports and package."""

    def __init__(
        self,
        support: LanguageSupport,
        *,
        denied_prefixes: Iterable[str] = (),
    ) -> None:
        self.support = support
        self.denied_prefixes: Tuple[str, ...] = DEFAULT_DENIED_PREFIXES + tuple(denied_prefixes)
        self.logger = get_logger("resolvers.imports")

    def is_denied(self, qualified_name: str) -> bool:
        if qualified_name.startswith(self.denied_prefixes):
            return True
        return DATA_BINDING_IMPORT.fullmatch(qualified_name) is not None

    def matching_import(
        self, symbol: str, document: SourceDocument, context: TokenContext
    ) -> Optional[str]:
        """Return the fully-qualified name ``symbol`` most likely refers to.

        The first import in source order wins; otherwise a capitalized symbol
        is assumed to live in the current package.
        """
        name = symbol.strip().replace("?", "")
        matches = document.imports.matching(name)
        self.logger.debug("Matching imports for %s: %s", name, [m.fully_qualified_name for m in matches])
        if matches:
            return matches[0].fully_qualified_name
        if name[:1].isupper():
            package_name = document.package_name
            self.logger.debug("No import matched %s, assuming package %r", name, package_name)
            return f"{package_name}.{name}" if package_name else name
        if context.line_text == self.support.import_statement(name):
            return name
        return None

    def file_url(
        self,
        document: SourceDocument,
        qualified_name: str,
        *,
        is_dir: bool = False,
        line_number: int = 1,
    ) -> Optional[str]:
        """Build the URL of ``qualified_name`` relative to the current file's source root."""
        current_url = strip_anchor(document.url)
        package_name = document.package_name
        if package_name:
            package_path = "/" + package_name.replace(".", "/") + "/"
            index = current_url.find(package_path)
            if index < 0:
                self.logger.debug("Package path %s not found in %s", package_path, current_url)
                return None
            base = current_url[:index]
        else:
            base = current_url.rsplit("/", 1)[0]

        path = f"{base}/{qualified_name.replace('.', '/')}"
        if is_dir:
            return path
        extension = file_extension(current_url)
        if extension is None:
            return None
        return f"{path}.{extension}#L{line_number}"

    def resolve_class(
        self, symbol: str, document: SourceDocument, context: TokenContext
    ) -> ClassResolution:
        name = symbol.strip().replace("?", "")
        if name:
            line_number = LineLocator(document.lines).find_first(self.support.class_pattern(name))
            if line_number > 0:
                self.logger.debug("%s is declared locally on line %d", name, line_number)
                return (
                    NavigationTarget(url=with_line_anchor(document.url, line_number)),
                    ResolutionStatus.RESOLVED,
                )

        matching = self.matching_import(name, document, context)
        if matching is None:
            return NavigationTarget.none(open_in_new_tab=True), ResolutionStatus.UNRESOLVED_IMPORT
        if self.is_denied(matching):
            self.logger.debug("%s resolves to denied import %s", name, matching)
            return NavigationTarget.none(open_in_new_tab=True), ResolutionStatus.DENIED_IMPORT
        url = self.file_url(document, matching)
        if url is None:
            return NavigationTarget.none(open_in_new_tab=True), ResolutionStatus.UNRESOLVED_IMPORT
        return NavigationTarget(url=url, open_in_new_tab=True), ResolutionStatus.RESOLVED

    def resolve_import_line(
        self, document: SourceDocument, context: TokenContext
    ) -> ClassResolution:
        """Resolve a click inside an import line to a file or a package directory."""
        if self.support.is_clicked_on_end_class(context):
            is_dir = False
            qualified_name = parse_import_package(context.line_text)
        else:
            is_dir = True
            qualified_name = directory_package(context.preceding + (context.token,))

        if not qualified_name or _QUALIFIED_NAME.fullmatch(qualified_name) is None:
            return NavigationTarget.none(), ResolutionStatus.UNRESOLVED_IMPORT
        if self.is_denied(qualified_name):
            return NavigationTarget.none(), ResolutionStatus.DENIED_IMPORT
        url = self.file_url(document, qualified_name, is_dir=is_dir)
        if url is None:
            return NavigationTarget.none(), ResolutionStatus.UNRESOLVED_IMPORT
        self.logger.debug("Import line resolved to %s (directory: %s)", url, is_dir)
        return NavigationTarget(url=url, open_in_new_tab=True), ResolutionStatus.RESOLVED


def directory_package(tokens: Sequence[str]) -> str:
    """Join the import-line tokens up to the clicked one, minus keywords."""
    return "".join(
        token for token in tokens if token.strip() not in {"import", "static"}
    ).strip()


__all__ = [
    "DATA_BINDING_IMPORT",
    "DEFAULT_DENIED_PREFIXES",
    "ImportResolver",
    "directory_package",
]
