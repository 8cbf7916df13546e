"""CLI entrypoints for sourcepilot commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .config import ConfigError, SourcePilotConfig, load_config
from .hosts.github import GitHubFiles
from .logging import configure_logging
from .models import ResolutionRequest, SourceDocument
from .navigator import Navigator
from .rendering import context_at


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .sourcepilot.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sourcepilot",
        description="Resolve tokens of hosted source files to their definitions.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve the token at a line and column of a local copy of a hosted file.",
    )
    _add_verbose_option(resolve_parser, suppress_default=True)
    _add_config_option(resolve_parser)
    resolve_parser.add_argument("path", help="Local copy of the file shown at --url.")
    resolve_parser.add_argument(
        "--url",
        required=True,
        help="URL the file is hosted at, e.g. https://github.com/<owner>/<repo>/blob/<ref>/<path>.",
    )
    resolve_parser.add_argument("--line", type=int, required=True, help="1-based line number.")
    resolve_parser.add_argument(
        "--column", type=int, required=True, help="1-based column of the clicked token."
    )
    resolve_parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Do not check that the resolved URL exists.",
    )
    resolve_parser.add_argument(
        "--no-follow",
        action="store_true",
        help="Do not fetch target files to anchor the called method.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP resolution service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sourcepilot commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "resolve":
        if args.no_validate:
            config.navigation.validate_links = False
        if args.no_follow:
            config.navigation.follow_methods = False
        try:
            message = _resolve(args, config)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except ValueError as exc:
            parser.exit(1, f"sourcepilot resolve failed: {exc}\n")
        print(message)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port, config=config)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _resolve(args: argparse.Namespace, config: SourcePilotConfig) -> str:
    text = Path(args.path).expanduser().read_text(encoding="utf-8")
    document = SourceDocument.from_text(text, args.url)
    if not 1 <= args.line <= len(document.lines):
        raise ValueError(f"line {args.line} is outside of {args.path}")

    navigator = Navigator(
        GitHubFiles(request_timeout=config.navigation.request_timeout), config=config
    )
    if navigator.activate(document) is None:
        raise ValueError(f"unsupported file type: {args.url}")

    line = document.lines[args.line - 1]
    context = context_at(line.text, args.column - 1, line_number=line.line_number)
    if context is None:
        return "not clickable"

    request = navigator.request(ResolutionRequest.for_context(context))
    resolution = asyncio.run(navigator.navigate(request))
    if resolution is None or resolution.target.url is None:
        if resolution is not None and resolution.diagnostic:
            return f"not clickable: {resolution.diagnostic}"
        return "not clickable"
    suffix = " (new tab)" if resolution.target.open_in_new_tab else ""
    return f"{resolution.target.url}{suffix}"


if __name__ == "__main__":
    main(sys.argv[1:])
