"""String resource references (``R.string.app_name``).

All strings share ``values/strings.xml``; the exact entry is anchored by a
secondary fetch of that file.
"""

from __future__ import annotations

import re
from typing import Optional

from ..models import NavigationTarget, Refinement
from .base import ResourceFeature


class StringResFeature(ResourceFeature):
    subkind = "string"

    def resource_path(self, name: str) -> str:
        return "res/values/strings.xml"

    def refinement(self, token: str, target: NavigationTarget) -> Optional[Refinement]:
        name = self.resource_name(token)
        if target.url is None or not name:
            return None
        pattern = rf'.*<string\s+name="{re.escape(name)}".*'
        return Refinement(fetch_url=target.url, pattern=pattern)
