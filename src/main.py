# src/main.py - v3
"""CLI entry point: report and cache commands.

Usage:
    myday report <snapshot.json> [options]
    myday cache list [--from DATE] [--to DATE] [--format FMT] [--llm-only]
    myday cache delete <report_id> [<report_id> ...]
    myday cache clear (--all | --before DATE) [--force]
    myday cache stats
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from myday.version import __version__

if TYPE_CHECKING:
    from myday.cache.base_cache_store import BaseReportCache
    from myday.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from myday.cache.base_cache_store import CacheError
    from myday.config.settings import ConfigurationError, load_settings
    from myday.core.loader import SnapshotError
    from myday.logging.logger import setup_logging
    from myday.report.assembler import NoCachedReportError
    from myday.summarizer.base_summarizer import SummarizationConfigError

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (
        ConfigurationError,
        SummarizationConfigError,
        NoCachedReportError,
        SnapshotError,
        CacheError,
    ) as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="myday",
        description=f"myday v{__version__} - daily standup reports from tracker activity",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- report ---
    p_report = subparsers.add_parser(
        "report", help="Generate the report for one day",
    )
    p_report.add_argument("snapshot", type=Path, help="Activity snapshot JSON file")
    p_report.add_argument(
        "--date", type=_parse_date, default=None,
        help="Report date, YYYY-MM-DD (default: today)",
    )
    p_report.add_argument(
        "--format", choices=("console", "markdown"), default=None,
        help="Output format (default: REPORT_FORMAT)",
    )
    p_report.add_argument(
        "--no-llm", action="store_true",
        help="Skip summarization entirely",
    )
    p_report.add_argument(
        "--style", default=None,
        help="Summary style: technical, business, brief",
    )
    p_report.add_argument(
        "--max-length", type=int, default=None,
        help="Maximum summary length in characters",
    )
    p_report.add_argument(
        "--detailed", action="store_true",
        help="Include priority, status and latest comment per issue",
    )
    p_report.add_argument(
        "--debug", action="store_true",
        help="Trace summarization and append the debug section",
    )
    p_report.add_argument(
        "--show-quality", action="store_true",
        help="Show quality indicators under the summary",
    )
    p_report.add_argument(
        "--verbose-debug", action="store_true",
        help="Show step outputs and suggestions in the debug section",
    )
    p_report.add_argument(
        "--field", dest="group_by_field", default=None,
        help="Group issues by this field instead of status",
    )
    cache_group = p_report.add_mutually_exclusive_group()
    cache_group.add_argument(
        "--no-cache", action="store_true",
        help="Neither read nor write the report cache",
    )
    cache_group.add_argument(
        "--cache-only", action="store_true",
        help="Serve from cache; fail instead of generating",
    )
    p_report.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the report to this file instead of stdout",
    )
    p_report.add_argument(
        "--export", action="store_true",
        help="Export the report as a markdown note",
    )
    p_report.add_argument(
        "--export-folder", default=None,
        help="Notes folder for --export (default: EXPORT_FOLDER)",
    )
    p_report.add_argument(
        "--debug-report", type=Path, default=None,
        help="Write the summarization debug trace to this JSON file",
    )
    p_report.set_defaults(func=_cmd_report)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Inspect and maintain the report cache")
    cache_sub = p_cache.add_subparsers(dest="cache_command")

    p_list = cache_sub.add_parser("list", help="List cached reports")
    p_list.add_argument("--from", dest="from_date", type=_parse_date, default=None)
    p_list.add_argument("--to", dest="to_date", type=_parse_date, default=None)
    p_list.add_argument("--format", dest="export_format", default=None)
    p_list.add_argument(
        "--llm-only", action="store_true",
        help="Only reports that carry a generated summary",
    )
    p_list.set_defaults(func=_cmd_cache_list)

    p_delete = cache_sub.add_parser("delete", help="Delete cached reports by id")
    p_delete.add_argument("report_ids", nargs="+")
    p_delete.set_defaults(func=_cmd_cache_delete)

    p_clear = cache_sub.add_parser("clear", help="Remove cached reports")
    clear_group = p_clear.add_mutually_exclusive_group(required=True)
    clear_group.add_argument("--all", action="store_true", help="Remove every entry")
    clear_group.add_argument(
        "--before", type=_parse_date, default=None,
        help="Remove entries dated strictly before YYYY-MM-DD",
    )
    p_clear.add_argument("--force", action="store_true", help="Do not ask for confirmation")
    p_clear.set_defaults(func=_cmd_cache_clear)

    p_stats = cache_sub.add_parser("stats", help="Show cache statistics")
    p_stats.set_defaults(func=_cmd_cache_stats)

    return parser


# --- report ---


def _cmd_report(args: argparse.Namespace, settings: Settings) -> int:
    """Generate, print and optionally export one report."""
    from myday.cache.base_cache_store import CacheIOError
    from myday.cache.cache_factory import create_cache_store
    from myday.config.report_config import ReportConfig
    from myday.config.settings import ConfigurationError
    from myday.core.loader import load_snapshot
    from myday.report.assembler import ReportAssembler
    from myday.tracking.exporter import export_debug_report_json

    target_date: date = args.date or date.today()
    snapshot = load_snapshot(args.snapshot)

    report_config = ReportConfig.from_settings(
        settings,
        report_format=args.format,
        summarization_enabled=False if args.no_llm else None,
        summary_style=args.style,
        max_summary_length=args.max_length,
        detailed=args.detailed or None,
        debug=args.debug or None,
        show_quality=args.show_quality or None,
        verbose=args.verbose_debug or None,
        group_by_field=args.group_by_field,
    )

    if args.no_cache:
        cache_mode = "bypass"
    elif args.cache_only:
        cache_mode = "only"
    else:
        cache_mode = "use"

    try:
        cache_store = create_cache_store(settings)
    except CacheIOError as exc:
        if cache_mode == "only":
            raise
        logger.warning("Report cache unavailable, continuing without it: %s", exc)
        cache_store = None

    assembler = ReportAssembler(
        report_config, cache_store, collect_trace=args.debug_report is not None
    )
    outcome = assembler.generate(snapshot, target_date, cache_mode)
    logger.info(
        "Report %s ready (cache: %s, %.1f ms)",
        outcome.report_id, outcome.cache_status, outcome.generation_ms,
    )

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(outcome.content + "\n", encoding="utf-8")
        print(f"Report written to {args.output}")
    else:
        print(outcome.content)

    if args.export or settings.export_enabled:
        folder = args.export_folder or settings.export_folder
        if not folder:
            raise ConfigurationError("--export requires --export-folder or EXPORT_FOLDER")
        path = assembler.export(outcome, target_date, folder, settings.export_tags_list)
        print(f"Exported to {path}")

    if args.debug_report is not None:
        if not assembler.traces:
            logger.warning("Summarizer cannot produce a debug trace; --debug-report ignored")
        elif outcome.summary is None or outcome.summary.debug_report is None:
            logger.warning(
                "No debug trace for %s (cache: %s)", outcome.report_id, outcome.cache_status
            )
        else:
            path = export_debug_report_json(outcome.summary.debug_report, args.debug_report)
            print(f"Debug report written to {path}")

    return 0


# --- cache ---


def _open_cache(settings: Settings) -> BaseReportCache | None:
    from myday.cache.cache_factory import create_cache_store

    store = create_cache_store(settings)
    if store is None:
        print("Report cache is disabled (CACHE_ENABLED=false)", file=sys.stderr)
    return store


def _cmd_cache_list(args: argparse.Namespace, settings: Settings) -> int:
    """List cached reports, newest first."""
    store = _open_cache(settings)
    if store is None:
        return 1

    entries = store.list_entries(
        from_date=args.from_date,
        to_date=args.to_date,
        export_format=args.export_format,
        summarized_only=args.llm_only,
    )
    if not entries:
        print("No cached reports found")
        return 0

    print(f"{'REPORT ID':<24} {'DATE':<10}  {'FORMAT':<8} {'SUMMARY':<7}  GENERATED")
    for entry in entries:
        print(
            f"{entry.report_id:<24} {entry.report_date.isoformat():<10}  "
            f"{entry.format:<8} {'yes' if entry.summarized else 'no':<7}  "
            f"{entry.generated_at.strftime('%Y-%m-%d %H:%M:%S')}"
        )
    print(f"\n{len(entries)} report(s)")
    return 0


def _cmd_cache_delete(args: argparse.Namespace, settings: Settings) -> int:
    """Delete entries by id. Exit 1 if any id was not found."""
    store = _open_cache(settings)
    if store is None:
        return 1

    missing = 0
    for report_id in args.report_ids:
        if store.delete(report_id):
            print(f"Deleted {report_id}")
        else:
            print(f"Not found: {report_id}", file=sys.stderr)
            missing += 1
    return 1 if missing else 0


def _cmd_cache_clear(args: argparse.Namespace, settings: Settings) -> int:
    """Clear everything or everything dated before a day."""
    store = _open_cache(settings)
    if store is None:
        return 1

    scope = "ALL cached reports" if args.all else f"cached reports before {args.before}"
    if not args.force:
        answer = input(f"Remove {scope}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted")
            return 0

    removed = store.clear_all() if args.all else store.clear_before(args.before)
    print(f"Removed {removed} cached report(s)")
    return 0


def _cmd_cache_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Print cache statistics."""
    store = _open_cache(settings)
    if store is None:
        return 1

    stats = store.stats()
    print(f"\nCache statistics for {stats.cache_root}:")
    print(f"  Reports:        {stats.total_count}")
    print(f"  Size:           {_human_size(stats.total_bytes)}")
    print(f"  With summary:   {stats.summarization_usage_count}")
    if stats.by_format:
        print("  By format:")
        for fmt, count in sorted(stats.by_format.items()):
            print(f"    {fmt:<10} {count}")
    if stats.by_date:
        print("  By date:")
        for day, count in sorted(stats.by_date.items(), reverse=True):
            print(f"    {day}  {count}")
    return 0


# --- helpers ---


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def _human_size(size: int) -> str:
    amount = float(size)
    for unit in ("B", "KB", "MB"):
        if amount < 1024:
            return f"{amount:.0f} {unit}" if unit == "B" else f"{amount:.1f} {unit}"
        amount /= 1024
    return f"{amount:.1f} GB"


if __name__ == "__main__":
    sys.exit(main())
