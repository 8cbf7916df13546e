"""Base class for resource feature plugins."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional

from ..hosts.github import strip_anchor
from ..models import NavigationTarget, Refinement, TokenContext
from ..parsing.common import parse_resource_name


class ResourceFeature(ABC):
    """Recognizes one kind of resource reference and builds its target URL.

    A feature owns a marker (``.layout``) that either precedes the clicked
    token as a sibling or appears inside it (``R.layout.main``). Markers of
    the enabled features must not overlap.
    """

    subkind: str = ""

    @property
    def marker(self) -> str:
        return f".{self.subkind}"

    def is_match(self, token: str, context: TokenContext) -> bool:
        if context.previous == self.marker:
            return True
        return re.search(rf"{re.escape(self.marker)}\.\w+", token) is not None

    def resource_name(self, token: str) -> Optional[str]:
        return parse_resource_name(token, self.subkind)

    @abstractmethod
    def resource_path(self, name: str) -> str:
        """Return the resource file path relative to the resource root segment."""

    def resolve(self, token: str, current_url: str, root_segment: str) -> NavigationTarget:
        name = self.resource_name(token)
        if not name:
            return NavigationTarget.none(open_in_new_tab=True)
        url = resource_url(current_url, root_segment, self.resource_path(name))
        return NavigationTarget(url=url, open_in_new_tab=True)

    def refinement(self, token: str, target: NavigationTarget) -> Optional[Refinement]:
        """Optional secondary hop that anchors a line inside the resource file."""
        return None


def resource_url(current_url: str, root_segment: str, relative: str) -> str:
    """Rewrite ``current_url`` up to the first ``/<root_segment>/`` and append ``relative``.

    Without that segment the resource is looked up beside the current file;
    link validation reports it as dead when it is not there.
    """
    url = strip_anchor(current_url)
    segment = f"/{root_segment.strip('/')}/"
    index = url.find(segment)
    if index < 0:
        return f"{url.rsplit('/', 1)[0]}{segment}{relative}"
    return f"{url[:index]}{segment}{relative}"


__all__ = ["ResourceFeature", "resource_url"]
