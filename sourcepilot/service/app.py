"""FastAPI application entrypoint for sourcepilot service mode."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import SourcePilotConfig, default_config
from ..hosts.github import GitHubFiles
from ..models import CodeLine, ResolutionRequest, SourceDocument, TokenContext
from ..navigator import Navigator
from ..rendering import context_at


class LinePayload(BaseModel):
    line_number: int
    text: str


class ResolveRequest(BaseModel):
    url: str
    text: str
    line_number: int
    column: Optional[int] = None
    siblings: Optional[List[str]] = None
    index: Optional[int] = None
    css_class: Optional[str] = None
    lines: Optional[List[LinePayload]] = None


class ResolveResponse(BaseModel):
    url: Optional[str] = None
    open_in_new_tab: bool = False
    diagnostic: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_navigator(config: SourcePilotConfig) -> Navigator:
    remote = GitHubFiles(request_timeout=config.navigation.request_timeout)
    return Navigator(remote, config=config)


def create_app(
    navigator_factory: Callable[[SourcePilotConfig], Navigator] = _default_navigator,
    config: Optional[SourcePilotConfig] = None,
) -> FastAPI:
    """Create the FastAPI application exposing click resolution."""

    settings = config or default_config()
    app = FastAPI(title="SourcePilot Service", version="1.0.0")

    async def get_navigator() -> Navigator:
        # One navigator per request; each request carries its own document.
        return navigator_factory(settings)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/resolve", response_model=ResolveResponse)
    async def resolve(
        payload: ResolveRequest,
        navigator: Navigator = Depends(get_navigator),
    ) -> ResolveResponse:
        document = _build_document(payload)
        context = _build_context(payload, document)
        if context is None:
            return ResolveResponse()

        if navigator.activate(document) is None:
            return ResolveResponse()
        request = navigator.request(ResolutionRequest.for_context(context))
        resolution = await navigator.navigate(request)
        if resolution is None:
            return ResolveResponse()
        return ResolveResponse(
            url=resolution.target.url,
            open_in_new_tab=resolution.target.open_in_new_tab,
            diagnostic=resolution.diagnostic,
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(
        _: Any, exc: ValueError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _build_document(payload: ResolveRequest) -> SourceDocument:
    if payload.lines:
        lines = tuple(CodeLine(line.line_number, line.text) for line in payload.lines)
        return SourceDocument(url=payload.url, full_text=payload.text, lines=lines)
    return SourceDocument.from_text(payload.text, payload.url)


def _build_context(payload: ResolveRequest, document: SourceDocument) -> Optional[TokenContext]:
    if payload.siblings is not None:
        if payload.index is None:
            raise ValueError("index is required when siblings are given")
        return TokenContext(
            siblings=tuple(payload.siblings),
            index=payload.index,
            css_class=payload.css_class,
            line_number=payload.line_number,
        )
    if payload.column is None:
        raise ValueError("Either column or siblings must be provided")
    line = next(
        (line for line in document.lines if line.line_number == payload.line_number), None
    )
    if line is None:
        raise ValueError(f"Line {payload.line_number} is not part of the document")
    return context_at(
        line.text,
        payload.column,
        line_number=payload.line_number,
        css_class=payload.css_class,
    )


def run_service(
    host: str = "127.0.0.1", port: int = 8000, config: Optional[SourcePilotConfig] = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(config=config)
    uvicorn.run(app, host=host, port=port)
