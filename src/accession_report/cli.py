"""CLI entrypoint for the accessions report."""

import argparse
from pathlib import Path
from typing import Any, Dict

from accession_report.api.export import export_accessions
from accession_report.config.loader import (
    DEFAULT_CONFIG_PATH,
    get_database_url,
    get_report_settings,
    load_config,
)
from accession_report.database.sqlite_client import session_context
from accession_report.report.enrichers import build_enrichers
from accession_report.report.filters import ANY_DEFINED_VALUE, NO_DEFINED_VALUE
from accession_report.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _report_params(args: argparse.Namespace) -> Dict[str, Any]:
    """Map CLI flags onto the report's named parameters."""
    params: Dict[str, Any] = {
        "from": args.date_from,
        "to": args.date_to,
        "processing_status": args.processing_status,
        "processing_priority": args.processing_priority,
        "classification": args.classification,
    }
    if args.donor:
        params["donor"] = {"ref": args.donor}
    return params


def cmd_run(args: argparse.Namespace) -> None:
    """Generate the accessions report."""
    config = load_config(args.config)
    database_url = get_database_url(config)
    settings = get_report_settings(config)

    repo_id = args.repo_id if args.repo_id is not None else settings["repo_id"]
    if repo_id is None:
        raise ValueError("Repository id required: pass --repo-id or set report.repo_id in the config")

    try:
        with session_context(database_url) as session:
            result = export_accessions(
                session,
                _report_params(args),
                repo_id=repo_id,
                enrichers=build_enrichers(settings),
                out=args.out,
            )
    except Exception as e:
        logger.error(f"Error generating accessions report: {e}", exc_info=True)
        raise

    print(result)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="accession-report",
        description="Filtered accession listings from an archival store",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (default: $ACCESSION_REPORT_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    run_parser = subparsers.add_parser("run", help="Generate the accessions report as JSON")
    run_parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Config file (default: {DEFAULT_CONFIG_PATH})",
    )
    run_parser.add_argument(
        "--repo-id",
        type=int,
        help="Repository id (default: report.repo_id from the config)",
    )
    run_parser.add_argument(
        "--from",
        dest="date_from",
        type=str,
        help="Start of the accession date range (default: 1800-01-01)",
    )
    run_parser.add_argument(
        "--to",
        dest="date_to",
        type=str,
        help="End of the accession date range (default: now)",
    )
    run_parser.add_argument(
        "--processing-status",
        type=str,
        help=f"Processing status value, '{NO_DEFINED_VALUE}' or '{ANY_DEFINED_VALUE}'",
    )
    run_parser.add_argument(
        "--processing-priority",
        type=str,
        help=f"Processing priority value, '{NO_DEFINED_VALUE}' or '{ANY_DEFINED_VALUE}'",
    )
    run_parser.add_argument(
        "--classification",
        type=str,
        help="Classification value (matches any of the three classification fields)",
    )
    run_parser.add_argument(
        "--donor",
        type=str,
        help="Donor agent reference, e.g. /agents/people/5",
    )
    run_parser.add_argument(
        "--out",
        type=Path,
        help="Output file path (if not provided, prints to stdout)",
    )
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
