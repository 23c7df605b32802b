"""Command line entry point.

``adplatforms serve`` runs the HTTP service; ``adplatforms query`` loads a
file and resolves locations against it without starting a server.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from collections.abc import Sequence

from aiohttp import web

from adplatforms import __version__
from adplatforms.config import AdPlatformsConfig
from adplatforms.exceptions import AdPlatformsConfigError, AdPlatformsError, EmptyBatchError, InvalidUploadError
from adplatforms.service import IndexService
from adplatforms.web import create_app

EXIT_NOT_FOUND = 1
EXIT_LOAD_FAILED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adplatforms",
        description="Serve or query the advertising platform location index.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", help="Bind address (default: ADPLATFORMS_HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port (default: ADPLATFORMS_PORT or 8080)")
    serve.add_argument("--preload", metavar="FILE", help="Load FILE before accepting requests")
    serve.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    query = sub.add_parser("query", help="Load a file and print platforms for locations")
    query.add_argument("file", help="Platform file, one 'Platform:loc1,loc2' record per line")
    query.add_argument("locations", nargs="+", metavar="LOCATION", help="Location to resolve, e.g. /ru/svrd")
    query.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    query.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _serve(args: argparse.Namespace) -> int:
    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("preload_path", args.preload))
        if value is not None
    }
    config = AdPlatformsConfig.from_env(**overrides)
    app = create_app(IndexService(config))
    web.run_app(app, host=config.host, port=config.port)
    return 0


def _query(args: argparse.Namespace) -> int:
    config = dataclasses.replace(AdPlatformsConfig.from_env(), raise_on_partial=False)
    service = IndexService(config)
    try:
        report = service.load_file(args.file)
    except (OSError, EmptyBatchError, InvalidUploadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_LOAD_FAILED

    for item in report.rejected:
        print(f"warning: skipped line {item.line_number}: {item.line}", file=sys.stderr)

    results: dict[str, list[str] | None] = {}
    exit_code = 0
    for location in args.locations:
        try:
            results[location] = service.get_platforms(location)
        except AdPlatformsError as exc:
            results[location] = None
            exit_code = EXIT_NOT_FOUND
            if not args.json_mode:
                print(f"{location}: {exc}", file=sys.stderr)

    if args.json_mode:
        print(json.dumps(results, ensure_ascii=False, indent=2))
    else:
        for location, platforms in results.items():
            if platforms is not None:
                print(f"{location}: {', '.join(platforms)}")
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        if args.command == "serve":
            return _serve(args)
        return _query(args)
    except AdPlatformsConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_LOAD_FAILED
