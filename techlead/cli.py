"""CLI entrypoints for techlead commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .project_root import detect_project_path
from .tools import call_tool


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


def _add_path_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--path",
        default=None,
        help="Project root to inspect (defaults to editor environment, nearest package.json, or cwd).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="techlead",
        description="Frontend tech lead tools: project and monorepo inspection for editor hosts.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the MCP server over stdio.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_path_option(serve_parser)

    service_parser = subparsers.add_parser(
        "service",
        help="Run the HTTP service exposing the same tools.",
    )
    _add_verbose_option(service_parser, suppress_default=True)
    _add_path_option(service_parser)
    service_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    service_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    info_parser = subparsers.add_parser(
        "info",
        help="Print the project report for a directory.",
    )
    _add_verbose_option(info_parser, suppress_default=True)
    info_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path to the project root (defaults to the detected project).",
    )

    hello_parser = subparsers.add_parser(
        "hello",
        help="Print the greeting returned by the hello_world tool.",
    )
    _add_verbose_option(hello_parser, suppress_default=True)
    _add_path_option(hello_parser)
    hello_parser.add_argument("name", nargs="?", default=None, help="Name to greet.")

    return parser


def _resolve_project(path: str | None) -> Path:
    if path:
        return Path(path).expanduser().resolve()
    return detect_project_path()


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for techlead commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbose = bool(args.verbose)
    configure_logging(verbose=verbose)
    project_path = _resolve_project(getattr(args, "path", None))

    try:
        config = load_config(project_path)
    except ConfigError as exc:
        parser.exit(1, f"techlead: invalid configuration: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"techlead: cannot read configuration: {exc}\n")

    if config.logging.verbose or config.logging.file is not None:
        configure_logging(
            verbose=verbose or config.logging.verbose, log_file=config.logging.file
        )

    if args.command == "serve":
        from .server import run_stdio

        run_stdio(project_path, config)
    elif args.command == "service":
        from .service import run_service

        run_service(args.host, args.port, project_path=project_path, config=config)
    elif args.command == "info":
        _print_blocks(call_tool("project_info", {}, project_path, config.selected_detectors()))
    elif args.command == "hello":
        arguments = {"name": args.name} if args.name else {}
        _print_blocks(call_tool("hello_world", arguments, project_path, config.selected_detectors()))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _print_blocks(blocks: list[dict[str, str]]) -> None:
    for block in blocks:
        print(block.get("text", ""))


if __name__ == "__main__":
    main(sys.argv[1:])
