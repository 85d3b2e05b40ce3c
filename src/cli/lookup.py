"""Command-line lookups through the cache.

Usage::

    python -m src.cli "never gonna give you up"
    python -m src.cli https://youtu.be/dQw4w9WgXcQ --json
    python -m src.cli "daft punk around the world" "aphex twin xtal" --stats

Queries run sequentially against the configured store (``CACHE_BACKEND``)
and resolver, exactly as the HTTP service would run them.  Exit code is 1
if any lookup failed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any


def _suppress_logs() -> None:
    """Send structlog and stdlib logging to stderr at WARNING+.

    Called after ``src.main`` is imported (which configures logging at import
    time) and before any component logs, so cached loggers pick this up.
    """
    import structlog

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)


def _format_text(query: str, metadata: dict[str, Any]) -> str:
    title = metadata.get("title") or "(untitled)"
    lines = [f"{query}", f"  {title}"]
    if metadata.get("url"):
        lines.append(f"  {metadata['url']}")
    if metadata.get("channel_title"):
        lines.append(f"  by {metadata['channel_title']}")
    if metadata.get("duration_seconds") is not None:
        minutes, seconds = divmod(int(metadata["duration_seconds"]), 60)
        lines.append(f"  {minutes}:{seconds:02d}")
    return "\n".join(lines)


async def _run(queries: list[str], json_output: bool, show_stats: bool, quiet: bool) -> int:
    # Deferred: src.main configures logging and settings at import time.
    from src.main import _build_all, _shutdown, settings
    from src.utils.errors import SongCacheError

    if quiet:
        _suppress_logs()

    components = _build_all(settings)
    query_cache = components["query_cache"]
    await components["store"].connect()

    results: list[dict[str, Any]] = []
    failed = 0
    try:
        for query in queries:
            try:
                metadata = await query_cache.lookup(query)
            except SongCacheError as exc:
                failed += 1
                results.append({"query": query, "error": type(exc).__name__, "detail": exc.message})
                print(f"Error: {query!r}: {exc}", file=sys.stderr)
                continue

            results.append({"query": query_cache.normalize(query), "metadata": metadata})
            if not json_output:
                print(_format_text(query_cache.normalize(query), metadata))
    finally:
        await _shutdown(components)

    stats = query_cache.get_stats().model_dump()
    if json_output:
        payload: dict[str, Any] = {"results": results}
        if show_stats:
            payload["stats"] = stats
        print(json.dumps(payload, indent=2, default=str))
    elif show_stats:
        print(
            f"hits={stats['cache_hits']} fetches={stats['fetch_count']} "
            f"errors={stats['error_count']}",
        )

    return 1 if failed else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Look up video metadata by free-text query or link, through the cache.",
    )
    parser.add_argument("queries", nargs="+", help="Free-text queries or video links.")
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print results as JSON (implies --quiet).",
    )
    parser.add_argument("--stats", action="store_true", help="Print hit/fetch/error counters.")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings, to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    quiet = args.quiet or args.json_output
    exit_code = asyncio.run(_run(args.queries, args.json_output, args.stats, quiet))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
