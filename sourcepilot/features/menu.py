"""Menu resource references (``R.menu.main``)."""

from __future__ import annotations

from .base import ResourceFeature


class MenuResFeature(ResourceFeature):
    subkind = "menu"

    def resource_path(self, name: str) -> str:
        return f"res/menu/{name}.xml"
