"""Main entry point for check_dns.

Resolves one host name with nslookup and prints a single monitoring-plugin
status line. The exit code is the service state.
"""

import argparse
import logging
import sys
from time import time
from typing import List, Optional, Tuple

from check_dns.config import Config
from check_dns.exceptions import CheckError, ParseError, SpawnError, UsageError
from check_dns.models.query import Query
from check_dns.models.scan_result import Outcome
from check_dns.models.service_state import ServiceState, max_state
from check_dns.services.logger import log_check_result, setup_logging
from check_dns.services.outcome_reporter import OutcomeReporter
from check_dns.services.process_runner import build_command, spawn
from check_dns.services.response_scanner import check_expected_address, scan
from check_dns.utils.host_utils import is_host, is_valid_ipv4


PROGNAME = "check_dns"
VERSION = "1.0.0"

logger = logging.getLogger(__name__)


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> PluginArgumentParser:
    p = PluginArgumentParser(
        prog=PROGNAME,
        description=(
            "Use nslookup to obtain the IP address for the given host/domain "
            "query. If no DNS server is specified, the system default "
            "server(s) are used."
        ),
    )
    p.add_argument("-H", "--hostname", help="The name or address you want to query")
    p.add_argument(
        "-s", "--server", help="Optional DNS server you want to use for the lookup"
    )
    p.add_argument(
        "-r",
        "--reverse-server",
        help="Optional DNS server used when the query is an IP address",
    )
    p.add_argument(
        "-a",
        "--expected-address",
        help="Optional IP address you expect the DNS server to return",
    )
    p.add_argument(
        "-t", "--timeout", type=int, help="Seconds before the lookup times out"
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Log every line read from nslookup"
    )
    p.add_argument("-V", "--version", action="version", version=f"{PROGNAME} {VERSION}")
    p.add_argument(
        "targets",
        nargs="*",
        metavar="TARGET",
        help="Host to query and optional server, if -H/-s are not given",
    )
    return p


def normalize_argv(argv: List[str]) -> List[str]:
    """Accept the legacy ``-to`` spelling of ``-t``."""
    return ["-t" if arg == "-to" else arg for arg in argv]


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    raw = sys.argv[1:] if argv is None else argv
    if not raw:
        raise UsageError("No host name specified")
    return build_parser().parse_args(normalize_argv(list(raw)))


def build_query(args: argparse.Namespace, config: Config) -> Query:
    """Validate parsed arguments and build the Query.

    Args:
        args: Parsed command line.
        config: Effective configuration (supplies the timeout).

    Returns:
        Query: Immutable query for this invocation.

    Raises:
        UsageError: If the host is missing or any value is malformed.
    """
    targets = list(args.targets)
    host_name = args.hostname
    if host_name is None and targets:
        host_name = targets.pop(0)
    dns_server = args.server
    if dns_server is None and targets:
        dns_server = targets.pop(0)
    if targets:
        raise UsageError(f"Unexpected argument: {targets[0]}")

    if not host_name:
        raise UsageError("No host name specified")
    if not is_host(host_name):
        raise UsageError(f"Invalid host name/address: {host_name}")
    if dns_server is not None and not is_host(dns_server):
        raise UsageError(f"Invalid server name/address: {dns_server}")
    if args.reverse_server is not None and not is_host(args.reverse_server):
        raise UsageError(f"Invalid host name/address: {args.reverse_server}")
    if args.expected_address is not None and not is_valid_ipv4(args.expected_address):
        raise UsageError(f"Invalid expected address: {args.expected_address}")

    return Query(
        host_name=host_name,
        dns_server=dns_server,
        reverse_server=args.reverse_server,
        expected_address=args.expected_address,
        timeout_seconds=config.timeout,
    )


def _apply_exit_status(outcome: Outcome, exit_status: int, resolver: str) -> Outcome:
    """Raise the outcome to at least WARNING when the resolver exited non-zero."""
    if exit_status == 0:
        return outcome
    logger.debug(f"{resolver} exited with status {exit_status}")
    return Outcome(
        severity=max_state(outcome.severity, ServiceState.WARNING),
        address=outcome.address,
        message=outcome.message or f"{resolver} returned error status",
    )


def resolve(query: Query, config: Config) -> Outcome:
    """Run the resolver for ``query`` and interpret its output.

    A failure line on stdout settles the result at once: the resolver is
    killed and reaped without waiting for it, so a resolver that keeps
    retrying cannot turn the reported failure into a timeout.

    Args:
        query: What to resolve.
        config: Resolver command and settings.

    Returns:
        Outcome: Parsed result, a parse failure, or a timeout.

    Raises:
        SpawnError: If the resolver cannot be started.
    """
    command = build_command(
        config.nslookup_command, query.host_name, query.resolver_server
    )

    with spawn(command, query.timeout_seconds) as process:
        try:
            outcome = scan(process.stdout_lines(), process.stderr_lines(), query)
        except ParseError as e:
            # Output cut short by the watchdog is reported as a timeout below
            outcome = Outcome.failure(
                e.state,
                f"'{config.nslookup_command}' {e}",
                terminal=not process.timed_out,
            )
        if outcome.terminal:
            return outcome
        exit_status = process.wait()

    if process.timed_out:
        return Outcome.failure(
            ServiceState.UNKNOWN,
            f"Plugin timed out after {query.timeout_seconds} seconds",
        )

    outcome = _apply_exit_status(outcome, exit_status, config.nslookup_command)
    return check_expected_address(outcome, query)


def run_check(query: Query, config: Config) -> Tuple[int, str]:
    """Resolve ``query`` and format the status line.

    Returns:
        Tuple[int, str]: (exit code, status line).
    """
    start_time = time()

    try:
        outcome = resolve(query, config)
    except SpawnError as e:
        outcome = Outcome.failure(e.state, str(e))

    elapsed = time() - start_time
    exit_code, message = OutcomeReporter.report(outcome, int(elapsed))

    log_check_result(
        host_name=query.host_name,
        dns_server=query.dns_server,
        state=outcome.severity.name,
        address=outcome.address,
        message=message,
        duration_ms=int(elapsed * 1000),
    )
    return exit_code, message


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN).
    """
    try:
        args = parse_args(argv)
        config = Config.from_env().with_overrides(
            timeout=args.timeout, verbose=args.verbose
        )
        setup_logging(verbose=config.verbose)
        query = build_query(args, config)
    except UsageError as e:
        print(f"{PROGNAME}: {e}")
        build_parser().print_usage(sys.stderr)
        return int(e.state)
    except ValueError as e:
        print(f"{PROGNAME}: {e}")
        return int(ServiceState.UNKNOWN)

    logger.debug(f"Checking {query.host_name} (server: {query.resolver_server or 'default'})")

    try:
        exit_code, message = run_check(query, config)
    except CheckError as e:
        logger.error(f"Check failed: {e}")
        exit_code, message = OutcomeReporter.report(
            Outcome.failure(e.state, str(e)), 0
        )
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        exit_code, message = OutcomeReporter.report(
            Outcome.failure(ServiceState.UNKNOWN, f"Internal error: {e}"), 0
        )

    print(message)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
