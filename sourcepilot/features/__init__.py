"""Resource feature plugins and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .base import ResourceFeature, resource_url
from .layout import LayoutResFeature
from .menu import MenuResFeature
from .strings import StringResFeature

_ENTRY_POINT_GROUP = "sourcepilot.features"

_BUILTIN_FACTORIES: dict[str, Callable[[], ResourceFeature]] = {
    "layout": LayoutResFeature,
    "menu": MenuResFeature,
    "string": StringResFeature,
}


def discover_features(enabled: Sequence[str] | None = None) -> List[ResourceFeature]:
    """Return instantiated resource features, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    features: List[ResourceFeature] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], ResourceFeature]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, ResourceFeature):
            raise TypeError(f"Feature factory for '{name}' did not return a ResourceFeature")
        features.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - broken third-party plugin
            raise RuntimeError(f"Failed to load feature entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> ResourceFeature:
            return _coerce_feature(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown resource features requested: {missing}")

    _ensure_distinct_markers(features)
    return features


def _ensure_distinct_markers(features: Sequence[ResourceFeature]) -> None:
    markers = [feature.marker for feature in features]
    for index, marker in enumerate(markers):
        for other in markers[index + 1 :]:
            if marker == other or marker.startswith(f"{other}.") or other.startswith(f"{marker}."):
                raise ValueError(f"Resource features claim overlapping markers: {marker}, {other}")


def _coerce_feature(obj: object) -> ResourceFeature:
    if isinstance(obj, ResourceFeature):
        return obj
    if isinstance(obj, type) and issubclass(obj, ResourceFeature):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, ResourceFeature):
            return instance
    raise TypeError("Feature entry point must be a ResourceFeature subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    entry_points = metadata.entry_points()
    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)  # type: ignore[return-value]
    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[return-value]


__all__ = [
    "LayoutResFeature",
    "MenuResFeature",
    "ResourceFeature",
    "StringResFeature",
    "discover_features",
    "resource_url",
]
