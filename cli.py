# DocCompare v1.2.0
#!/usr/bin/env python3
"""
DocCompare CLI

Command-line interface for comparing JSON documents.
"""
import argparse
import json
import logging
import sys

from config import settings

logger = logging.getLogger("doccompare.cli")


def _load(paths: list[str], split_arrays: bool):
    from core import parse_json_documents

    try:
        return parse_json_documents(paths, split_arrays=split_arrays)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def _print_result(result, parsed, output_format: str):
    from core import format_report

    if output_format == "json":
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        sources = [f"{p.filename} ({p.label})" for p in parsed]
        print(format_report(result, sources=sources, app_version=settings.APP_VERSION))


def compare_files(
    paths: list[str],
    mode: str = "line",
    diff_only: bool = False,
    ignore_array_order: bool = False,
    split_arrays: bool = False,
    output_format: str = "text"
) -> int:
    """Compare JSON files and print the result. Returns the exit status."""
    from core import compare_documents

    parsed = _load(paths, split_arrays)
    if parsed is None:
        return 1

    result = compare_documents(
        [p.document for p in parsed],
        mode=mode,
        show_differences_only=diff_only,
        ignore_array_order=ignore_array_order,
        labels=[p.label for p in parsed],
        timestamp_field=settings.TIMESTAMP_FIELD,
        char_diff_timeout=settings.CHAR_DIFF_TIMEOUT
    )
    _print_result(result, parsed, output_format)

    return 0 if result.is_identical else 1


def watch_files(
    paths: list[str],
    mode: str = "line",
    diff_only: bool = False,
    ignore_array_order: bool = False,
    split_arrays: bool = False,
    output_format: str = "text"
) -> int:
    """Re-run the comparison every time one of the files changes."""
    from services.cache import ComparisonCache
    from services.watcher import DocumentWatcher
    import time

    cache = ComparisonCache(
        max_size=settings.COMPARE_CACHE_SIZE,
        char_diff_timeout=settings.CHAR_DIFF_TIMEOUT,
        timestamp_field=settings.TIMESTAMP_FIELD
    )

    def on_documents(parsed):
        result = cache.compare(
            [p.document for p in parsed],
            mode=mode,
            show_differences_only=diff_only,
            ignore_array_order=ignore_array_order,
            labels=[p.label for p in parsed]
        )
        _print_result(result, parsed, output_format)

    watcher = DocumentWatcher(
        paths,
        on_documents,
        split_arrays=split_arrays,
        debounce_seconds=settings.WATCH_DEBOUNCE_SECONDS
    )

    try:
        watcher.start()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Watching {len(paths)} file(s)")
    print("Press Ctrl+C to stop\n")
    watcher.reload()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nStopping watcher...")
    finally:
        watcher.stop()

    return 0


def run_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False, workers: int = 1):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if not reload else 1  # reload mode requires single worker
    )


def _add_compare_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("files", nargs="+", help="JSON files; the first is the base document")
    parser.add_argument(
        "--mode",
        choices=["line", "character", "semantic"],
        default=settings.DEFAULT_MODE,
        help=f"Diff mode (default: {settings.DEFAULT_MODE})"
    )
    parser.add_argument("--diff-only", action="store_true", help="Show differences only")
    parser.add_argument(
        "--ignore-array-order",
        action="store_true",
        help="Semantic mode: compare arrays regardless of element order"
    )
    parser.add_argument(
        "--split-arrays",
        action="store_true",
        help="Treat a top-level JSON array as several documents"
    )
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="DocCompare - compare JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # compare
    compare_parser = subparsers.add_parser("compare", help="Compare JSON files")
    _add_compare_arguments(compare_parser)

    # watch
    watch_parser = subparsers.add_parser("watch", help="Compare JSON files on every change")
    _add_compare_arguments(watch_parser)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--workers", type=int, default=1, help="Number of worker processes")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.command in ("compare", "watch"):
        handler = compare_files if args.command == "compare" else watch_files
        return handler(
            args.files,
            mode=args.mode,
            diff_only=args.diff_only,
            ignore_array_order=args.ignore_array_order,
            split_arrays=args.split_arrays,
            output_format=args.format
        )

    run_server(args.host, args.port, args.reload, args.workers)
    return 0


if __name__ == "__main__":
    sys.exit(main())
