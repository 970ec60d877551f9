"""Command-line interface for twinref."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
from rich.console import Console
from rich.logging import RichHandler

from model.symbols import Position
from parse.treesitter_symbols import extract_symbols_treesitter
from resolve.dispatcher import CrossLanguageResolver
from rules.config import ConfigError, load_config
from source.workspace import WorkspaceSymbolSource
from utils import language_for_path

if TYPE_CHECKING:
    from model.symbols import Location, Symbol

logger = logging.getLogger(__name__)


def configure_logging(level: int) -> None:
    """Configure process-wide logging; records go to stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=True, show_path=False
            )
        ],
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a 1-based number, got {value}")
    return number


def _add_lookup_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Go or TypeScript file holding the symbol")
    parser.add_argument("--line", type=_positive_int, required=True, help="1-based line")
    parser.add_argument(
        "--column", type=_positive_int, required=True, help="1-based column"
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Workspace root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twinref")
    parser.add_argument(
        "--verbose", action="store_true", help="Log debug output to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    references_parser = subparsers.add_parser(
        "references", help="Find references to the other-language counterpart"
    )
    _add_lookup_arguments(references_parser)

    implementations_parser = subparsers.add_parser(
        "implementations", help="Find the other-language counterpart declarations"
    )
    _add_lookup_arguments(implementations_parser)

    symbols_parser = subparsers.add_parser("symbols", help="Dump a file's symbol tree")
    symbols_parser.add_argument("file", help="Go or TypeScript file")

    return parser


def _emit(record: dict[str, Any]) -> None:
    sys.stdout.write(orjson.dumps(record).decode("utf-8") + "\n")


def _location_record(location: Location) -> dict[str, Any]:
    return {
        "path": location.path.as_posix(),
        "line": location.range.start.line + 1,
        "column": location.range.start.character + 1,
        "end_line": location.range.end.line + 1,
        "end_column": location.range.end.character + 1,
    }


def _symbol_record(symbol: Symbol) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": symbol.name,
        "kind": symbol.kind.value,
        "line": symbol.selection_range.start.line + 1,
        "column": symbol.selection_range.start.character + 1,
    }
    if symbol.detail:
        record["detail"] = symbol.detail
    if symbol.children:
        record["children"] = [_symbol_record(child) for child in symbol.children]
    return record


def _resolve_source_file(file: str) -> Path | None:
    path = Path(file).expanduser().resolve()
    if not path.is_file():
        sys.stderr.write(f"error: file not found: {path}\n")
        return None
    if language_for_path(path) is None:
        sys.stderr.write(f"error: not a Go or TypeScript file: {path}\n")
        return None
    return path


def _handle_lookup(command: str, file: str, line: int, column: int, root: str) -> int:
    path = _resolve_source_file(file)
    if path is None:
        return 2

    root_path = Path(root).expanduser().resolve()
    try:
        config = load_config(root_path)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    resolver = CrossLanguageResolver(
        WorkspaceSymbolSource.from_config(root_path, config), config
    )
    position = Position(line=line - 1, character=column - 1)
    if command == "references":
        locations = asyncio.run(resolver.resolve_references(path, position))
    else:
        locations = asyncio.run(resolver.resolve_implementations(path, position))

    logger.debug("%s: %d location(s)", command, len(locations))
    for location in locations:
        _emit(_location_record(location))
    return 0


def _handle_symbols(file: str) -> int:
    path = _resolve_source_file(file)
    if path is None:
        return 2
    for symbol in extract_symbols_treesitter(path):
        _emit(_symbol_record(symbol))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command in ("references", "implementations"):
        return _handle_lookup(args.command, args.file, args.line, args.column, args.root)

    if args.command == "symbols":
        return _handle_symbols(args.file)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
