"""Line-oriented parsers for package, import and resource declarations."""

from .common import file_extension, parse_resource_name
from .imports import IMPORT_PATTERN, parse_import_package, parse_imports

__all__ = [
    "IMPORT_PATTERN",
    "file_extension",
    "parse_import_package",
    "parse_imports",
    "parse_resource_name",
]
