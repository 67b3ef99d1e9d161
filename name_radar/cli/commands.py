"""
CLI command entry points for name_radar.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from pydantic import ValidationError

from name_radar.cache import AppCache
from name_radar.cli.args import (
    add_cache_dir_argument,
    add_run_arguments,
    read_names,
    run_config_from_args,
)
from name_radar.cli.logging import print_run_header, setup_logging
from name_radar.config import RunConfig, get_settings
from name_radar.consensus.usage import BatchResult, UsagePipeline, check_names
from name_radar.domain.models import UsageVerdict
from name_radar.reporting.csv_report import (
    build_summary,
    report_stem,
    verdict_rows,
    write_combined_csv,
    write_csv,
    write_json_summary,
)
from name_radar.reporting.xlsx_report import write_xlsx_report
from name_radar.scoring.brand import calculate_brand_score
from name_radar.scoring.competitors import generate_executive_summary
from name_radar.sources.dns_check import create_resolver
from name_radar.sources.search import build_providers
from name_radar.sources.whois_check import PythonWhoisClient
from name_radar.utils.http import create_client
from name_radar.utils.rate_limiting import RateLimiterRegistry

SCRIPT_NAME = "name_radar"


def _build_check_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="name-radar",
        description="Check where a business name is already in use and score its viability",
    )
    parser.add_argument("name", nargs="?", help="Name to check")
    parser.add_argument("--input", "-i", type=Path, help="File with one name per line")
    add_run_arguments(parser)
    parser.add_argument("--out", type=Path, help="CSV output file (single name only)")
    parser.add_argument(
        "--outdir", type=Path, default=Path("results"), help="Directory for per-name CSV files"
    )
    parser.add_argument("--combine-csv", type=Path, help="Also write one CSV for the whole batch")
    parser.add_argument("--json-dir", type=Path, help="Directory for per-name JSON summaries")
    parser.add_argument("--xlsx-dir", type=Path, help="Directory for per-name Excel workbooks")
    add_cache_dir_argument(parser)
    parser.add_argument("--log-file", action="store_true", help="Also log to logs/")
    parser.add_argument("--debug", action="store_true", help="Show debug messages")
    return parser


def _log_verdict_summary(logger: logging.Logger, verdict: UsageVerdict, brand_score):
    summary = generate_executive_summary(verdict.name, brand_score)
    logger.info("-" * 70)
    logger.info(f"{verdict.name}: {brand_score.overall}/100 {brand_score.grade.label}")
    logger.info(f"  Records found: {verdict.found_count}")
    logger.info(f"  {summary['recommendation']}")
    for finding in summary["key_findings"]:
        logger.info(f"  {finding}")
    for rec in brand_score.recommendations:
        logger.info(f"  [{rec.priority}] {rec.category}: {rec.message}")


async def _run_check(
    names: list[str],
    config: RunConfig,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> BatchResult:
    settings = get_settings()
    cache_dir = args.cache_dir or settings.name_radar_cache_dir
    single_out = args.out if len(names) == 1 else None
    used_stems: set[str] = set()

    def on_verdict(verdict: UsageVerdict):
        brand_score = calculate_brand_score(verdict.name, verdict.records)
        stem = report_stem(verdict.name, used_stems)
        write_csv(single_out or args.outdir / f"{stem}.csv", verdict_rows(verdict))
        if args.json_dir:
            summary = build_summary(verdict, brand_score, run_meta={"engine": config.engine})
            write_json_summary(args.json_dir / f"{stem}.json", summary)
        if args.xlsx_dir:
            write_xlsx_report(args.xlsx_dir / f"{stem}.xlsx", verdict, brand_score)
        _log_verdict_summary(logger, verdict, brand_score)

    with AppCache(cache_dir) as cache, PythonWhoisClient() as whois_client:
        async with create_client(settings.name_radar_user_agent, config.timeouts.http) as client:
            limiters = RateLimiterRegistry(config.rate_limits)
            providers = build_providers(
                config.engine, client, settings.serpapi_key, limiters.get("search")
            )
            pipeline = UsagePipeline(
                config,
                client,
                create_resolver(config.timeouts.dns),
                whois_client,
                providers,
                cache=cache,
                limiters=limiters,
            )
            result = await check_names(
                pipeline, names, on_verdict=on_verdict, show_progress=len(names) > 1
            )
            logger.info(f"Stats: {pipeline.stats.summary()}")
    return result


def run_check(argv: list[str] | None = None) -> int:
    """Entry point for the name-radar command."""
    parser = _build_check_parser()
    args = parser.parse_args(argv)
    logger = setup_logging(SCRIPT_NAME, log_to_file=args.log_file, debug=args.debug)

    if args.input:
        try:
            names = read_names(args.input)
        except FileNotFoundError:
            logger.error(f"Input file not found: {args.input}")
            return 1
    elif args.name:
        names = [args.name.strip()]
    else:
        logger.error("Provide a name or --input FILE")
        return 1

    names = [n for n in names if n]
    if not names:
        logger.error("No names to check")
        return 1

    try:
        config = run_config_from_args(args, show_progress=len(names) == 1)
    except ValidationError as e:
        logger.error(f"Invalid options: {e}")
        return 1

    print_run_header(f"Name Radar: checking {len(names)} name(s)", logger)
    result = asyncio.run(_run_check(names, config, args, logger))

    if args.combine_csv and result.verdicts:
        write_combined_csv(args.combine_csv, result.verdicts)
    for name, error in result.failures.items():
        logger.error(f"Failed: {name}: {error}")
    logger.info(f"Done: {len(result.verdicts)} succeeded, {len(result.failures)} failed")
    return 0


def run_cache(argv: list[str] | None = None) -> int:
    """Entry point for the name-radar-cache command."""
    parser = argparse.ArgumentParser(prog="name-radar-cache", description="Manage evidence cache")
    parser.add_argument("command", choices=["stats", "list", "clear"])
    parser.add_argument("--namespace", "-n", help="Filter by namespace")
    parser.add_argument("--limit", type=int, default=20, help="Limit for list")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    add_cache_dir_argument(parser)
    args = parser.parse_args(argv)

    cache_dir = args.cache_dir or get_settings().name_radar_cache_dir
    with AppCache(cache_dir) as cache:
        if args.command == "stats":
            stats = cache.stats()
            print(f"Cache: {stats['cache_dir']}")
            print(f"  Total entries: {stats['total']}")
            print(f"  Size: {stats['size_mb']} MB")
            print("  By namespace:")
            for ns, count in sorted(stats["by_namespace"].items()):
                print(f"    {ns}: {count}")

        elif args.command == "list":
            keys = cache.keys(namespace=args.namespace, limit=args.limit)
            print(f"Keys ({args.namespace or 'all'}, limit {args.limit}):")
            for key in keys:
                print(f"  {key}")

        elif args.command == "clear":
            if not args.namespace:
                print("Specify --namespace to clear (whois, crt)")
                return 1
            if not args.yes:
                confirm = input(f"Clear all {args.namespace} entries? [y/N] ")
                if confirm.lower() != "y":
                    print("Aborted")
                    return 0
            count = cache.clear_namespace(args.namespace)
            print(f"Cleared {count} entries from {args.namespace}")
    return 0
