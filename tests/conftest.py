from __future__ import annotations

import pytest

from sourcepilot.config import SourcePilotConfig
from sourcepilot.engine import ResolutionEngine, create_engine
from sourcepilot.models import SourceDocument
from tests._fixtures.documents import MAIN_ACTIVITY, make_document


@pytest.fixture
def main_document() -> SourceDocument:
    """The sample Kotlin activity used across engine tests."""
    return make_document(MAIN_ACTIVITY)


@pytest.fixture
def offline_config(tmp_path) -> SourcePilotConfig:
    config = SourcePilotConfig(root=tmp_path)
    config.navigation.validate_links = False
    return config


@pytest.fixture
def main_engine(main_document: SourceDocument, offline_config: SourcePilotConfig) -> ResolutionEngine:
    engine = create_engine(main_document, offline_config)
    assert engine is not None
    return engine
