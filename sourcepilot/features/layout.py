"""Layout resource references (``R.layout.activity_main``)."""

from __future__ import annotations

from .base import ResourceFeature


class LayoutResFeature(ResourceFeature):
    subkind = "layout"

    def resource_path(self, name: str) -> str:
        return f"res/layout/{name}.xml"
