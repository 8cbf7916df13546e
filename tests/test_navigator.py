"""Tests for asynchronous navigation and snapshot handling."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import pytest

from sourcepilot.config import SourcePilotConfig
from sourcepilot.models import NavigationTarget, ResolutionStatus, SourceDocument, Unclassified
from sourcepilot.navigator import Navigator
from tests._fixtures.documents import (
    MAIN_ACTIVITY,
    SOURCE_ROOT,
    FakeRemote,
    click,
    make_document,
)

REPOSITORY_URL = f"{SOURCE_ROOT}/com/app/main/Repository.kt"
HOME_URL = f"{SOURCE_ROOT}/com/app/ui/Home.kt"
REPOSITORY_SOURCE = "package com.app.main\n\nclass Repository {\n\n    fun load() {\n    }\n}\n"


@pytest.fixture
def config(tmp_path: Path) -> SourcePilotConfig:
    return SourcePilotConfig(root=tmp_path)


@pytest.fixture
def delivered() -> List[NavigationTarget]:
    return []


def _navigator(remote, config, delivered) -> Navigator:
    return Navigator(remote, config=config, sink=delivered.append)


def test_external_call_is_refined_validated_and_delivered_once(config, delivered) -> None:
    remote = FakeRemote(texts={REPOSITORY_URL: REPOSITORY_SOURCE})
    navigator = _navigator(remote, config, delivered)
    document = make_document(MAIN_ACTIVITY)
    navigator.activate(document)

    resolution = asyncio.run(navigator.navigate(click(document, 18, ".load")))

    assert resolution is not None
    assert resolution.target == NavigationTarget(url=f"{REPOSITORY_URL}#L5", open_in_new_tab=True)
    assert delivered == [resolution.target]
    assert remote.fetched == [f"{REPOSITORY_URL}#L1"]
    assert remote.checked == [f"{REPOSITORY_URL}#L5"]


def test_failed_secondary_fetch_keeps_file_level_target(config, delivered) -> None:
    remote = FakeRemote()
    navigator = _navigator(remote, config, delivered)
    document = make_document(MAIN_ACTIVITY)
    navigator.activate(document)

    resolution = asyncio.run(navigator.navigate(click(document, 18, ".load")))

    assert resolution is not None
    assert resolution.target.url == f"{REPOSITORY_URL}#L1"
    assert delivered == [resolution.target]


def test_dead_link_is_not_clickable(config, delivered) -> None:
    remote = FakeRemote(missing=[HOME_URL])
    navigator = _navigator(remote, config, delivered)
    document = make_document(MAIN_ACTIVITY)
    navigator.activate(document)

    resolution = asyncio.run(navigator.navigate(click(document, 17, "Home")))

    assert resolution is not None
    assert resolution.status is ResolutionStatus.DEAD_LINK
    assert resolution.target == NavigationTarget(url=None, open_in_new_tab=True)
    assert delivered == [resolution.target]


def test_validation_can_be_disabled(config, delivered) -> None:
    config.navigation.validate_links = False
    remote = FakeRemote(missing=[HOME_URL])
    navigator = _navigator(remote, config, delivered)
    document = make_document(MAIN_ACTIVITY)
    navigator.activate(document)

    resolution = asyncio.run(navigator.navigate(click(document, 17, "Home")))

    assert resolution is not None
    assert resolution.target.url == f"{HOME_URL}#L1"
    assert remote.checked == []


def test_request_for_previous_snapshot_is_dropped(config, delivered) -> None:
    navigator = _navigator(FakeRemote(), config, delivered)
    previous = make_document(MAIN_ACTIVITY)
    navigator.activate(previous)
    request = click(previous, 17, "Home")
    navigator.activate(make_document(MAIN_ACTIVITY))

    assert asyncio.run(navigator.navigate(request)) is None
    assert delivered == []


def test_result_is_dropped_when_snapshot_changes_while_validating(config, delivered) -> None:
    document = make_document(MAIN_ACTIVITY)
    replacement = make_document(MAIN_ACTIVITY)

    class NavigatingAwayRemote(FakeRemote):
        def exists(self, url: str) -> bool:
            navigator.activate(replacement)
            return super().exists(url)

    navigator = _navigator(NavigatingAwayRemote(), config, delivered)
    navigator.activate(document)

    assert asyncio.run(navigator.navigate(click(document, 17, "Home"))) is None
    assert delivered == []
    assert navigator.active_snapshot == replacement.snapshot_id


def test_request_helper_tags_active_snapshot(config, delivered) -> None:
    navigator = _navigator(FakeRemote(), config, delivered)
    document = make_document(MAIN_ACTIVITY)
    navigator.activate(document)
    untagged = click(document, 17, "Home")

    tagged = navigator.request(untagged)

    assert tagged.snapshot_id == document.snapshot_id


def test_unsupported_document_delivers_non_clickable_target(config, delivered) -> None:
    navigator = _navigator(FakeRemote(), config, delivered)
    document = SourceDocument.from_text("x = 1\n", "https://github.com/a/b/blob/main/setup.py")

    assert navigator.activate(document) is None
    resolution = asyncio.run(navigator.navigate(click(document, 1, "x")))

    assert resolution is not None
    assert resolution.kind == Unclassified()
    assert delivered == [NavigationTarget(url=None)]


def test_deactivate_clears_engine(config, delivered) -> None:
    navigator = _navigator(FakeRemote(), config, delivered)
    navigator.activate(make_document(MAIN_ACTIVITY))

    navigator.deactivate()

    assert navigator.engine is None
    assert navigator.active_snapshot is None


def test_missing_resource_outside_root_segment_is_a_dead_link(config, delivered) -> None:
    url = "https://github.com/a/b/blob/master/src/com/app/Main.kt"
    document = SourceDocument.from_text("setContentView(R.layout.activity_main)\n", url)
    remote = FakeRemote(
        missing=["https://github.com/a/b/blob/master/src/com/app/main/res/layout/activity_main.xml"]
    )
    navigator = _navigator(remote, config, delivered)
    navigator.activate(document)

    resolution = asyncio.run(navigator.navigate(click(document, 1, ".activity_main")))

    assert resolution is not None
    assert resolution.status is ResolutionStatus.DEAD_LINK
    assert delivered == [NavigationTarget(url=None, open_in_new_tab=True)]


def test_pages_that_are_not_file_views_get_no_engine(config, delivered) -> None:
    navigator = _navigator(FakeRemote(), config, delivered)
    document = SourceDocument.from_text(
        MAIN_ACTIVITY, "app/src/main/java/com/app/main/MainActivity.kt"
    )

    assert navigator.activate(document) is None
    resolution = asyncio.run(navigator.navigate(click(document, 20, "refresh")))

    assert resolution is not None
    assert delivered == [NavigationTarget(url=None)]
