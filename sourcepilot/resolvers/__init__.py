"""Symbol resolvers used by the resolution engine."""

from .imports import DEFAULT_DENIED_PREFIXES, ImportResolver, directory_package
from .variables import VariableTypeTracker

__all__ = [
    "DEFAULT_DENIED_PREFIXES",
    "ImportResolver",
    "VariableTypeTracker",
    "directory_package",
]
