"""Asynchronous orchestration around the resolution engine.

The navigator owns the active document snapshot, performs the network
steps (secondary hop, link validation) off the event loop and delivers one
target per request to the sink. Results computed for a snapshot that is no
longer active are dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Callable, Optional, TypeVar

from .config import SourcePilotConfig, default_config
from .engine import ResolutionEngine, create_engine
from .hosts.github import FetchError, RemoteFiles, is_file_url
from .logging import get_logger
from .models import (
    NavigationTarget,
    Resolution,
    ResolutionRequest,
    ResolutionStatus,
    SourceDocument,
    Unclassified,
)

NavigationSink = Callable[[NavigationTarget], None]

_T = TypeVar("_T")


class Navigator:
    """Resolves clicks against the active snapshot and reports targets."""

    def __init__(
        self,
        remote: Optional[RemoteFiles] = None,
        *,
        config: Optional[SourcePilotConfig] = None,
        sink: Optional[NavigationSink] = None,
        engine_factory: Callable[
            [SourceDocument, SourcePilotConfig], Optional[ResolutionEngine]
        ] = create_engine,
    ) -> None:
        self.remote = remote
        self.config = config or default_config()
        self.sink = sink
        self._engine_factory = engine_factory
        self._engine: Optional[ResolutionEngine] = None
        self.logger = get_logger("navigator")

    @property
    def engine(self) -> Optional[ResolutionEngine]:
        return self._engine

    @property
    def active_snapshot(self) -> Optional[str]:
        return self._engine.document.snapshot_id if self._engine is not None else None

    def activate(self, document: SourceDocument) -> Optional[ResolutionEngine]:
        """Make ``document`` the active snapshot, discarding the previous one.

        Only file views of the code host get an engine; other pages leave
        nothing clickable.
        """
        if not is_file_url(document.url):
            self._engine = None
            self.logger.info("Not a file view: %s", document.url)
            return None
        self._engine = self._engine_factory(document, self.config)
        if self._engine is None:
            self.logger.info("No language support for %s", document.url)
        else:
            self.logger.info("Activated %s", document.url)
        return self._engine

    def deactivate(self) -> None:
        self._engine = None

    def request(self, request: ResolutionRequest) -> ResolutionRequest:
        """Tag ``request`` with the active snapshot."""
        return replace(request, snapshot_id=self.active_snapshot)

    async def navigate(self, request: ResolutionRequest) -> Optional[Resolution]:
        """Resolve ``request`` and deliver the best-known target to the sink.

        Returns None, without notifying the sink, when the request or its
        result belongs to a snapshot that is no longer active.
        """
        engine = self._engine
        if engine is None:
            resolution = Resolution(
                NavigationTarget.none(), Unclassified(), ResolutionStatus.UNCLASSIFIED
            )
            self._deliver(resolution)
            return resolution

        snapshot_id = engine.document.snapshot_id
        if request.snapshot_id is not None and request.snapshot_id != snapshot_id:
            self.logger.debug("Dropping request for stale snapshot %s", request.snapshot_id)
            return None

        resolution = engine.resolve(request)
        resolution = await self._follow_refinement(engine, resolution)
        resolution = await self._validate(resolution)

        if self.active_snapshot != snapshot_id:
            self.logger.debug("Snapshot changed while resolving %r; dropping", request.token)
            return None

        self._deliver(resolution)
        return resolution

    async def _follow_refinement(
        self, engine: ResolutionEngine, resolution: Resolution
    ) -> Resolution:
        refinement = resolution.refinement
        if refinement is None or self.remote is None or not self.config.navigation.follow_methods:
            return resolution
        try:
            text = await _run_blocking(self.remote.fetch_text, refinement.fetch_url)
        except (FetchError, OSError) as exc:
            self.logger.warning("Secondary lookup in %s failed: %s", refinement.fetch_url, exc)
            return resolution
        return engine.refine(resolution, text)

    async def _validate(self, resolution: Resolution) -> Resolution:
        target = resolution.target
        if target.url is None or self.remote is None or not self.config.navigation.validate_links:
            return resolution
        try:
            exists = await _run_blocking(self.remote.exists, target.url)
        except OSError as exc:
            self.logger.warning("Validating %s failed: %s", target.url, exc)
            exists = False
        if exists:
            return resolution
        self.logger.debug("Dead link %s", target.url)
        return replace(
            resolution,
            target=NavigationTarget.none(target.open_in_new_tab),
            status=ResolutionStatus.DEAD_LINK,
        )

    def _deliver(self, resolution: Resolution) -> None:
        if self.sink is not None:
            self.sink(resolution.target)


async def _run_blocking(func: Callable[[str], _T], argument: str) -> _T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, argument)


__all__ = ["NavigationSink", "Navigator"]
