"""Resolution engine: classify a clicked token and resolve it to a target."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Sequence

from .classifier import TokenClassifier
from .config import SourcePilotConfig, default_config
from .features import MenuResFeature, ResourceFeature, discover_features
from .hosts.github import with_line_anchor
from .languages import LanguageSupport, support_for_url
from .locator import LineLocator
from .logging import get_logger
from .models import (
    BareSymbol,
    ExternalCallOnVariable,
    ImportStatementSelf,
    InternalCall,
    NavigationTarget,
    PrimitiveType,
    ReferenceKind,
    Refinement,
    Resolution,
    ResolutionRequest,
    ResolutionStatus,
    ResourceReference,
    SourceDocument,
    VariableUse,
)
from .resolvers import ImportResolver, VariableTypeTracker

MULTIPLE_DEFINITIONS = "Selected method has multiple definitions"


class ResolutionEngine:
    """Resolves clicks against one immutable document snapshot.

    Apart from the document (whose imports are parsed once, on first use) the
    engine keeps no state between calls; every request is resolved from its
    token and structural context alone.
    """

    def __init__(
        self,
        document: SourceDocument,
        support: LanguageSupport,
        *,
        features: Optional[Sequence[ResourceFeature]] = None,
        config: Optional[SourcePilotConfig] = None,
    ) -> None:
        self.document = document
        self.support = support
        self.config = config or default_config()
        if features is None:
            features = discover_features(self.config.resources.enabled)
        self.features: Dict[str, ResourceFeature] = {
            feature.subkind: feature for feature in features
        }
        self.classifier = TokenClassifier(support, features)
        self.imports = ImportResolver(
            support, denied_prefixes=self.config.resolution.denied_prefixes
        )
        self.variables = VariableTypeTracker(support)
        self.locator = LineLocator(document.lines)
        self.logger = get_logger("engine")

    def resolve(self, request: ResolutionRequest) -> Resolution:
        """Return the immediate target for ``request`` and any refinement stage."""
        kind = self.classifier.classify(request, self.document)
        self.logger.debug("Classified %r as %s", request.token, kind)
        resolution = self._dispatch(request, kind)
        return replace(resolution, snapshot_id=self.document.snapshot_id)

    def refine(self, resolution: Resolution, fetched_text: str) -> Resolution:
        """Anchor the refinement's matching line inside ``fetched_text``.

        The file-level target is kept when nothing in the fetched text matches.
        """
        refinement = resolution.refinement
        if refinement is None or resolution.target.url is None:
            return resolution
        line_number = LineLocator.from_text(fetched_text).find_first(refinement.pattern)
        if line_number <= 0:
            self.logger.debug("No line in %s matched %s", refinement.fetch_url, refinement.pattern)
            return resolution
        target = replace(
            resolution.target, url=with_line_anchor(resolution.target.url, line_number)
        )
        return replace(resolution, target=target)

    # Kind handlers ---------------------------------------------------------

    def _dispatch(self, request: ResolutionRequest, kind: ReferenceKind) -> Resolution:
        if isinstance(kind, PrimitiveType):
            return Resolution(NavigationTarget.none(True), kind, ResolutionStatus.PRIMITIVE)
        if isinstance(kind, ResourceReference):
            return self._resource(request, kind)
        if isinstance(kind, ImportStatementSelf):
            target, status = self.imports.resolve_import_line(self.document, request.context)
            return Resolution(target, kind, status)
        if isinstance(kind, InternalCall):
            return self._internal_call(request, kind)
        if isinstance(kind, VariableUse):
            return self._variable(request, kind)
        if isinstance(kind, ExternalCallOnVariable):
            return self._external_call(request, kind)
        if isinstance(kind, BareSymbol):
            target, status = self.imports.resolve_class(kind.name, self.document, request.context)
            return Resolution(target, kind, status)
        return Resolution(NavigationTarget.none(True), kind, ResolutionStatus.UNCLASSIFIED)

    def _resource(self, request: ResolutionRequest, kind: ResourceReference) -> Resolution:
        feature = self.features.get(kind.subkind)
        if feature is None and kind.subkind == "menu":
            feature = MenuResFeature()
        if feature is None:
            return Resolution(NavigationTarget.none(True), kind, ResolutionStatus.UNCLASSIFIED)
        target = feature.resolve(
            request.token, self.document.url, self.config.resources.root_segment
        )
        if not target.clickable:
            return Resolution(target, kind, ResolutionStatus.UNRESOLVED_DEFINITION)
        refinement = feature.refinement(request.token, target)
        if not self.config.navigation.follow_methods:
            refinement = None
        return Resolution(target, kind, ResolutionStatus.RESOLVED, refinement=refinement)

    def _internal_call(self, request: ResolutionRequest, kind: InternalCall) -> Resolution:
        line_numbers = self.locator.find_all(self.support.method_pattern(kind.method_name))
        if len(line_numbers) == 1:
            return self._goto(line_numbers[0], kind)
        if len(line_numbers) > 1:
            self.logger.debug("%s is defined on lines %s", kind.method_name, line_numbers)
            return Resolution(
                NavigationTarget.none(),
                kind,
                ResolutionStatus.AMBIGUOUS_DEFINITION,
                diagnostic=MULTIPLE_DEFINITIONS,
            )
        if kind.method_name[:1].isupper():
            # Constructor call of a class rather than a local function.
            target, status = self.imports.resolve_class(
                kind.method_name, self.document, request.context
            )
            return Resolution(target, kind, status)
        return Resolution(NavigationTarget.none(), kind, ResolutionStatus.UNRESOLVED_DEFINITION)

    def _variable(self, request: ResolutionRequest, kind: VariableUse) -> Resolution:
        line_number = self.locator.find_assignment(kind.variable_name)
        if line_number <= 0:
            declaration = self.support.declaration_pattern(kind.variable_name)
            if declaration is not None:
                line_number = self.locator.find_first(declaration)
        if line_number > 0:
            return self._goto(line_number, kind)
        if kind.variable_name[:1].isupper():
            # Static access such as ``Config.load()``.
            target, status = self.imports.resolve_class(
                kind.variable_name, self.document, request.context
            )
            return Resolution(target, kind, status)
        return Resolution(NavigationTarget.none(), kind, ResolutionStatus.UNRESOLVED_DEFINITION)

    def _external_call(
        self, request: ResolutionRequest, kind: ExternalCallOnVariable
    ) -> Resolution:
        declared_type = self.variables.find_declared_type(
            kind.variable_name, self.document.full_text
        )
        if declared_type is None:
            return Resolution(NavigationTarget.none(), kind, ResolutionStatus.UNRESOLVED_DEFINITION)
        self.logger.debug("%s is a %s", kind.variable_name, declared_type)
        target, status = self.imports.resolve_class(declared_type, self.document, request.context)
        refinement = None
        if target.url is not None and self.config.navigation.follow_methods:
            refinement = Refinement(
                fetch_url=target.url, pattern=self.support.method_pattern(kind.method_name)
            )
        return Resolution(target, kind, status, refinement=refinement)

    def _goto(self, line_number: int, kind: ReferenceKind) -> Resolution:
        target = NavigationTarget(url=with_line_anchor(self.document.url, line_number))
        return Resolution(target, kind, ResolutionStatus.RESOLVED)


def create_engine(
    document: SourceDocument,
    config: Optional[SourcePilotConfig] = None,
    *,
    features: Optional[Sequence[ResourceFeature]] = None,
) -> Optional[ResolutionEngine]:
    """Return an engine for ``document``, or None when its language is unsupported."""
    support = support_for_url(document.url)
    if support is None:
        get_logger("engine").debug("No language support for %s", document.url)
        return None
    return ResolutionEngine(document, support, features=features, config=config)


__all__ = ["MULTIPLE_DEFINITIONS", "ResolutionEngine", "create_engine"]
