"""Click-to-definition navigation for rendered source files."""

from .engine import ResolutionEngine, create_engine
from .models import (
    CodeLine,
    NavigationTarget,
    Resolution,
    ResolutionRequest,
    ResolutionStatus,
    SourceDocument,
    TokenContext,
)
from .navigator import Navigator

__all__ = [
    "CodeLine",
    "NavigationTarget",
    "Navigator",
    "Resolution",
    "ResolutionEngine",
    "ResolutionRequest",
    "ResolutionStatus",
    "SourceDocument",
    "TokenContext",
    "create_engine",
]
