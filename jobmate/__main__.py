"""Main entry point for the Jobmate matching CLI."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from jobmate import __version__
from jobmate.config.settings import Settings
from jobmate.utils.logging import configure_logging


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("value must be an integer >= 1")
    return number


def _timestamp_run_id(prefix: str) -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}"


def _resolve_run_dir(
    settings: Settings, *, prefix: str, out_run_dir: Path | None
) -> Path:
    if out_run_dir is not None:
        run_dir = out_run_dir
    else:
        run_dir = settings.output_dir / "runs" / _timestamp_run_id(prefix)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _write_json(path: Path, payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    path.write_text(
        json.dumps(payload, indent=2, default=_default),
        encoding="utf-8",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="jobmate",
        description="Jobmate: compatibility scoring and geo-aware matching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m jobmate score --requester requester.yaml --listing listing.json
  python -m jobmate search --requester requester.yaml --listings listings.json \\
      --lat 37.7749 --lng -122.4194 --radius 5 --sort-by distance
  python -m jobmate reply --match match_result.json --job job.yaml \\
      --specialist specialist.yaml
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    # score
    score_parser = subparsers.add_parser(
        "score",
        help="Score one listing against a requester",
    )
    score_parser.add_argument(
        "--requester",
        type=Path,
        required=True,
        help="Path to requester record (YAML/JSON, User or UserPreferences shape)",
    )
    score_parser.add_argument(
        "--listing",
        type=Path,
        required=True,
        help="Path to listing record (YAML/JSON)",
    )
    score_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Write match_result.json to this directory",
    )

    # search
    search_parser = subparsers.add_parser(
        "search",
        help="Rank and paginate listings for a requester",
    )
    search_parser.add_argument(
        "--requester",
        type=Path,
        required=True,
        help="Path to requester record (YAML/JSON)",
    )
    search_parser.add_argument(
        "--listings",
        type=Path,
        required=True,
        help="Path to a list of listing records (YAML/JSON)",
    )
    search_parser.add_argument("--lat", type=float, default=None, help="Center latitude")
    search_parser.add_argument("--lng", type=float, default=None, help="Center longitude")
    search_parser.add_argument(
        "--radius",
        type=float,
        default=None,
        help="Search radius in km; centred on the requester without --lat/--lng",
    )
    search_parser.add_argument(
        "--sort-by",
        choices=["rating", "distance", "price"],
        default="rating",
        help="Sort field (default: rating)",
    )
    search_parser.add_argument(
        "--sort-order",
        choices=["asc", "desc"],
        default=None,
        help="Sort order (default: desc, or asc for distance)",
    )
    search_parser.add_argument("--page", type=_positive_int, default=1, help="Page number")
    search_parser.add_argument(
        "--limit", type=_positive_int, default=None, help="Results per page"
    )
    search_parser.add_argument(
        "--category-id", default=None, help="Only listings in this category"
    )
    search_parser.add_argument(
        "--min-rating", type=float, default=None, help="Minimum average rating"
    )
    search_parser.add_argument(
        "--location", default=None, help="Location text the listing must contain"
    )
    search_parser.add_argument(
        "--verified-only",
        action="store_true",
        help="Only listings whose client payment is verified",
    )
    search_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Write ranked_page.json to this directory",
    )

    # reply
    reply_parser = subparsers.add_parser(
        "reply",
        help="Generate an auto-reply for a matched job",
    )
    reply_parser.add_argument(
        "--match",
        type=Path,
        required=True,
        help="Path to match_result.json (from the score command)",
    )
    reply_parser.add_argument(
        "--job", type=Path, required=True, help="Path to job record (YAML/JSON)"
    )
    reply_parser.add_argument(
        "--specialist",
        type=Path,
        required=True,
        help="Path to specialist record (YAML/JSON)",
    )
    reply_parser.add_argument(
        "--requester",
        type=Path,
        default=None,
        help="Path to requester record used for the greeting",
    )
    reply_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Also write reply.txt to this directory",
    )

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"Jobmate v{__version__} running {parsed.mode}")

    try:
        if parsed.mode == "score":
            return _run_score(parsed, settings)
        if parsed.mode == "search":
            return _run_search(parsed, settings)
        if parsed.mode == "reply":
            return _run_reply(parsed, settings)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        # InvalidParameterError is a ValueError
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def _run_score(parsed: argparse.Namespace, settings: Settings) -> int:
    from jobmate.matching.adapters import listing_from_record
    from jobmate.matching.loader import RecordLoader
    from jobmate.matching.scorer import CompatibilityScorer, rating_reputation

    loader = RecordLoader()
    criteria = loader.load_criteria(parsed.requester)
    listing = listing_from_record(loader.load_mapping(parsed.listing))

    scorer = CompatibilityScorer(reputation_lookup=rating_reputation)
    result = scorer.score(criteria, listing)

    run_dir = _resolve_run_dir(
        settings,
        prefix="score",
        out_run_dir=getattr(parsed, "out_run_dir", None),
    )

    print(scorer.format_result(result))
    _write_json(run_dir / "match_result.json", result)
    print(f"\nWrote: {run_dir / 'match_result.json'}")
    return 0


def _run_search(parsed: argparse.Namespace, settings: Settings) -> int:
    from jobmate.matching.loader import RecordLoader
    from jobmate.matching.scorer import CompatibilityScorer, rating_reputation
    from jobmate.matching.service import MatchingService, SearchQuery

    loader = RecordLoader()
    criteria = loader.load_criteria(parsed.requester)
    records = loader.load_list(parsed.listings)

    query = SearchQuery(
        category_id=parsed.category_id,
        min_rating=parsed.min_rating,
        location=parsed.location,
        latitude=parsed.lat,
        longitude=parsed.lng,
        radius_km=parsed.radius,
        sort_by=parsed.sort_by,
        sort_order=parsed.sort_order,
        page=parsed.page,
        limit=parsed.limit,
        verified_only=parsed.verified_only,
    )

    service = MatchingService(
        scorer=CompatibilityScorer(reputation_lookup=rating_reputation)
    )
    page = service.search(criteria, records, query)

    run_dir = _resolve_run_dir(
        settings,
        prefix="search",
        out_run_dir=getattr(parsed, "out_run_dir", None),
    )

    print(service.format_page(page))
    _write_json(run_dir / "ranked_page.json", page)
    print(f"\nWrote: {run_dir / 'ranked_page.json'}")
    return 0


def _run_reply(parsed: argparse.Namespace, settings: Settings) -> int:
    from jobmate.matching.loader import RecordLoader
    from jobmate.reply.generator import AutoReplyGenerator
    from jobmate.reply.models import JobPost, RequesterProfile, SpecialistProfile

    loader = RecordLoader()
    match = loader.load_match(parsed.match)
    job = JobPost.model_validate(loader.load_mapping(parsed.job))
    specialist = SpecialistProfile.model_validate(loader.load_mapping(parsed.specialist))
    requester = None
    if parsed.requester is not None:
        requester = RequesterProfile.model_validate(
            loader.load_mapping(parsed.requester)
        )

    reply = AutoReplyGenerator().generate(job, specialist, requester, match)
    print(reply)

    out_run_dir = getattr(parsed, "out_run_dir", None)
    if out_run_dir is not None:
        run_dir = _resolve_run_dir(settings, prefix="reply", out_run_dir=out_run_dir)
        (run_dir / "reply.txt").write_text(reply + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
