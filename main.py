"""
Review Dashboard

CLI entry point: serve the API, query listing bundles, export trend
tables, curate reviews and run bad review detection.
"""

import argparse
import json
import logging
import sys

import config.settings as settings
from reviewboard.agents.issue_detection import create_issue_agent
from reviewboard.export.trend_table import TrendTableExporter
from reviewboard.models.filters import ReviewFilters
from reviewboard.service import ReviewDashboardService
from reviewboard.store.review_store import JsonReviewStore, ReviewStoreError


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Filter flags mirroring the API query parameters."""
    parser.add_argument("--listing", help="Listing name substring or listing id")
    parser.add_argument("--type", help="Review direction (guest-to-host, host-to-guest)")
    parser.add_argument("--channel", help="Channel name")
    parser.add_argument("--from", dest="date_from", help="Earliest submission date (ISO-8601)")
    parser.add_argument("--to", dest="date_to", help="Latest submission date (ISO-8601)")
    parser.add_argument("--min-rating", help="Minimum resolved rating (1-5)")
    parser.add_argument("--sort", choices=["asc", "desc"], help="Sort listings by average rating")
    parser.add_argument("--approved-only", action="store_true", help="Only approved reviews")


def filters_from_args(args: argparse.Namespace) -> ReviewFilters:
    return ReviewFilters.from_query({
        "listing": args.listing,
        "type": args.type,
        "channel": args.channel,
        "from": args.date_from,
        "to": args.date_to,
        "minRating": args.min_rating,
        "sort": args.sort,
        "approvedOnly": "true" if args.approved_only else None,
    })


def parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"Expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Review Dashboard - listing review aggregation and curation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve the HTTP API
  python main.py serve --port 8000

  # Listings with at least a 4-star average from one channel
  python main.py listings --channel airbnb --min-rating 4 --sort desc

  # Export monthly trend table
  python main.py export --from 2024-01-01

  # Approve review 7, then delete it
  python main.py approve 7 --set true
  python main.py delete 7

Note: Set GEMINI_API_KEY to use AI bad review detection.
        """
    )

    parser.add_argument(
        "--reviews-path",
        default=str(settings.REVIEWS_PATH),
        help=f"Reviews JSON file (default: {settings.REVIEWS_PATH})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.API_HOST)
    serve.add_argument("--port", type=int, default=settings.API_PORT)

    listings = subparsers.add_parser("listings", help="Print listing bundles as JSON")
    add_filter_arguments(listings)

    export = subparsers.add_parser("export", help="Export the monthly trend table to CSV")
    add_filter_arguments(export)
    export.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    approve = subparsers.add_parser("approve", help="Set or toggle review approval")
    approve.add_argument("review_id")
    approve.add_argument("--set", dest="approved", type=parse_bool, help="true or false; omit to toggle")

    delete = subparsers.add_parser("delete", help="Delete a review")
    delete.add_argument("review_id")

    subparsers.add_parser("bad-reviews", help="Flag reviews that need host attention")

    return parser


def coerce_id(review_id: str):
    return int(review_id) if review_id.isdigit() else review_id


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if args.command == "serve":
        import uvicorn

        settings.REVIEWS_PATH = args.reviews_path
        logger.info(f"Serving API on {args.host}:{args.port}")
        uvicorn.run("reviewboard.api.app:app", host=args.host, port=args.port)
        return

    store = JsonReviewStore(args.reviews_path)
    service = ReviewDashboardService(store)

    try:
        if args.command == "listings":
            result = service.get_normalized_listings(filters_from_args(args))
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))

        elif args.command == "export":
            result = service.get_normalized_listings(filters_from_args(args))
            output_path = TrendTableExporter(args.output_dir).export(result)
            print(f"Trend table: {output_path}")
            print(f"Metadata: {output_path.replace('.csv', '_metadata.json')}")

        elif args.command == "approve":
            outcome = service.set_approval(coerce_id(args.review_id), args.approved)
            print(json.dumps(outcome.to_dict()))
            if not outcome.success:
                sys.exit(1)

        elif args.command == "delete":
            ok = service.delete_review(coerce_id(args.review_id))
            print(json.dumps({"success": ok}))
            if not ok:
                sys.exit(1)

        elif args.command == "bad-reviews":
            agent = create_issue_agent()
            report = agent.detect(store.read_all())
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))

    except ReviewStoreError as e:
        logger.error(f"Review store unavailable: {e}")
        print(f"Failed to read reviews: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
