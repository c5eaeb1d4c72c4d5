"""Main entry point for the PerfOps DNS resolve runner."""

import argparse
import logging
import sys

from src.config import Config
from src.models.dns_test import DNSResolveRequest, SUPPORTED_QUERY_TYPES
from src.services.logger import setup_logging
from src.services.perfops_client import PerfOpsClient, PerfOpsError
from src.services.poller import Poller, write_stdout
from src.services.snapshot_reporter import SnapshotReporter
from src.utils.request_utils import normalize_query_type, parse_node_ids


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perfops-resolve",
        description="Resolve a DNS record on a target, e.g., google.com.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  perfops-resolve --dns-server 8.8.8.8 --type A bing.com
  perfops-resolve -S 1.1.1.1 -T MX -F Germany -L 5 example.com
  perfops-resolve -S 8.8.8.8 -T AAAA -N 12,34 --json example.com
        """,
    )
    parser.add_argument("target", help="Domain name to resolve")
    parser.add_argument(
        "-T",
        "--type",
        required=True,
        dest="query_type",
        help=f"The DNS query type. One of: {', '.join(SUPPORTED_QUERY_TYPES)}.",
    )
    parser.add_argument(
        "-S",
        "--dns-server",
        required=True,
        help="The DNS server to use to query for the test. You can use 127.0.0.1 "
        "to use the local resolver for location based benchmarking.",
    )
    parser.add_argument(
        "-F", "--from", dest="location", default="", help="A location to run the test from"
    )
    parser.add_argument(
        "-N", "--nodes", default="", help="A comma separated list of node IDs to run the test from"
    )
    parser.add_argument(
        "-L", "--limit", type=int, default=1, help="The maximum number of nodes to use"
    )
    parser.add_argument(
        "--json", action="store_true", default=None, help="Print the final result as JSON"
    )
    parser.add_argument(
        "--debug", action="store_true", default=None, help="Print the test ID and debug logs"
    )
    return parser


def build_request(args: argparse.Namespace) -> DNSResolveRequest:
    """Validate parsed arguments into a test request.

    Args:
        args: Parsed command-line arguments.

    Returns:
        DNSResolveRequest: Immutable test request.

    Raises:
        ValueError: If an argument is invalid.
    """
    target = args.target.strip()
    if not target:
        raise ValueError("Target must not be empty")

    dns_server = args.dns_server.strip()
    if not dns_server:
        raise ValueError("DNS server must not be empty")

    if args.limit < 1:
        raise ValueError("Limit must be at least 1")

    return DNSResolveRequest(
        target=target,
        query_type=normalize_query_type(args.query_type),
        dns_server=dns_server,
        location=args.location.strip(),
        nodes=parse_node_ids(args.nodes),
        limit=args.limit,
    )


def main(argv: list[str] | None = None) -> int:
    """Main execution function.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        int: Exit code (0 for success, 1 for fatal error).
    """
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env().with_overrides(
            output_json=args.json, debug=args.debug
        )
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(debug=config.debug)

    try:
        request = build_request(args)

        with PerfOpsClient(config.api_url, timeout=config.http_timeout) as client:
            poller = Poller(client, config)
            snapshot = poller.run(request)

        if config.output_json:
            write_stdout(SnapshotReporter.generate_json_report(snapshot) + "\n")

        return 0

    except (PerfOpsError, ValueError) as e:
        logger.error(f"Fatal error: {e}", exc_info=config.debug)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
