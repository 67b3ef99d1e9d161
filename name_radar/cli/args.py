"""
Argument parsing utilities for the name_radar CLI.

Keeps the flag set and its translation into a RunConfig in one place.
"""

import argparse
from pathlib import Path

from name_radar.config import RunConfig
from name_radar.constants import DEFAULT_CONCURRENCY, DEFAULT_SEARCH_LIMIT


def add_cache_dir_argument(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Evidence cache directory (default: NAME_RADAR_CACHE_DIR or data/cache)",
    )


def add_run_arguments(parser: argparse.ArgumentParser):
    """
    Add the pipeline flags to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument("--limit", type=int, default=DEFAULT_SEARCH_LIMIT, help="Search result cap")
    parser.add_argument(
        "--engine",
        choices=["auto", "serpapi", "bing", "ddg", "multi"],
        default="auto",
        help="Search engine selection",
    )
    parser.add_argument(
        "--probe",
        choices=["off", "auto", "always"],
        default="auto",
        help="Candidate domain probing mode",
    )
    parser.add_argument("--strict", action="store_true", help="Keep only exact matches")
    parser.add_argument(
        "--allow-mentions", action="store_true", help="Keep plain mentions in the results"
    )
    parser.add_argument("--no-whois", action="store_true", help="Skip WHOIS lookups")
    parser.add_argument("--no-crt", action="store_true", help="Skip certificate transparency")
    parser.add_argument("--no-social", action="store_true", help="Skip direct social probes")
    parser.add_argument(
        "--show-candidates",
        action="store_true",
        help="Keep records without usage evidence",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help="Maximum concurrent lookups per name",
    )


def run_config_from_args(args: argparse.Namespace, show_progress: bool = False) -> RunConfig:
    """
    Build a RunConfig from parsed arguments.

    Raises:
        pydantic.ValidationError: on out-of-range values (limit, concurrency)
    """
    return RunConfig(
        engine=args.engine,
        limit=args.limit,
        probe_mode=args.probe,
        strict=args.strict,
        allow_mentions=args.allow_mentions,
        whois_enabled=not args.no_whois,
        crt_enabled=not args.no_crt,
        social_probe_enabled=not args.no_social,
        only_found=not args.show_candidates,
        concurrency=args.concurrency,
        show_progress=show_progress,
    )


def read_names(path: Path) -> list[str]:
    """
    Read one name per line, skipping blank lines and # comments.

    Raises:
        FileNotFoundError: if path does not exist
    """
    names = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                names.append(line)
    return names
