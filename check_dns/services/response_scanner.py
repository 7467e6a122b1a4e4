"""Response scanner for resolver output.

Consumes the resolver's stdout then stderr line by line and reduces them to a
single Outcome. Stdout scanning stops at the first terminal line: a forward
record (success), or a recognised failure message (error). Stderr is always
read to the end and can only make the result worse.
"""

import logging
from typing import Iterable, Iterator

from check_dns.exceptions import ParseError
from check_dns.models.query import Query
from check_dns.models.scan_result import Outcome, ScanState
from check_dns.models.service_state import ServiceState
from check_dns.services.line_classifier import classify


logger = logging.getLogger(__name__)

REVERSE_ZONE_MARKERS = (".in-addr.arpa", ".ip6.arpa")
REVERSE_NAME_TOKEN = "name = "
FORWARD_NAME_MARKER = "Name:"

EMPTY_HOST_NAME = "returned empty host name string"
NO_ADDRESS = "output parsing exited with no address"
UNKNOWN_PLUGIN_ERROR = "Unknown error (plugin)"


def text_after_colon(line: str) -> str:
    """Return the text following the first colon, stripped.

    Lines without a colon are returned whole, stripped.

    Examples:
        >>> text_after_colon("Address:   93.184.216.34\\n")
        '93.184.216.34'
        >>> text_after_colon("connection timed out")
        'connection timed out'
    """
    _, sep, rest = line.partition(":")
    return (rest if sep else line).strip()


def _read_reverse_name(line: str, state: ScanState) -> str | None:
    """Return the name from a reverse-lookup record, if the line is one.

    A reverse-zone line without the ``name =`` token records a WARNING and
    yields None, so the line is still classified.
    """
    if not any(marker in line for marker in REVERSE_ZONE_MARKERS):
        return None
    _, sep, rest = line.partition(REVERSE_NAME_TOKEN)
    if not sep:
        state.escalate(ServiceState.WARNING, UNKNOWN_PLUGIN_ERROR)
        return None
    return rest.strip()


def _read_forward_address(line: str, state: ScanState) -> None:
    """Record the address from the line that follows a ``Name:`` line.

    The severity is left as it is: a warning seen earlier in the output
    still applies to the captured address.

    Raises:
        ParseError: If the address field is empty.
    """
    _, sep, rest = line.partition(":")
    if not sep:
        state.escalate(ServiceState.WARNING, UNKNOWN_PLUGIN_ERROR)
        return

    address = rest.lstrip(" ").rstrip()
    if not address:
        raise ParseError(EMPTY_HOST_NAME)

    state.resolved_address = address


def _scan_stdout(lines: Iterator[str], state: ScanState, query: Query) -> Outcome | None:
    """Scan stdout up to the first terminal line.

    Returns:
        Outcome | None: A terminal Outcome when a failure line ends the check
        early, None when scanning should continue with stderr.
    """
    for line in lines:
        logger.debug(f"stdout: {line.rstrip()}")

        reverse_name = _read_reverse_name(line, state)
        if reverse_name is not None:
            # A later forward record overwrites this candidate
            state.resolved_address = reverse_name
            continue

        if FORWARD_NAME_MARKER in line:
            state.saw_name_marker = True
            address_line = next(lines, None)
            if address_line is None:
                logger.debug("stdout ended after name record")
                return None
            logger.debug(f"stdout: {address_line.rstrip()}")
            _read_forward_address(address_line, state)
            return None

        verdict = classify(line, query)
        if not verdict.is_ok():
            return Outcome(
                severity=verdict.severity,
                address=None,
                message=verdict.diagnostic or "",
                terminal=True,
            )

    return None


def _scan_stderr(lines: Iterable[str], state: ScanState, query: Query) -> None:
    for line in lines:
        logger.debug(f"stderr: {line.rstrip()}")
        verdict = classify(line, query)
        if not verdict.is_ok():
            state.escalate(verdict.severity, text_after_colon(line))


def scan(
    stdout_lines: Iterable[str],
    stderr_lines: Iterable[str],
    query: Query,
) -> Outcome:
    """Reduce resolver output to a single Outcome.

    Args:
        stdout_lines: Lines from the resolver's standard output, read lazily.
        stderr_lines: Lines from the resolver's standard error, read lazily
            and only after stdout scanning has finished.
        query: The query that produced the output.

    Returns:
        Outcome: OK with the resolved address, or the failure severity and
        diagnostic. A failure line on stdout returns a terminal Outcome at
        once without reading anything further.

    Raises:
        ParseError: If the forward record has an empty address, or if no
            address was captured by the end of both streams.
    """
    state = ScanState()

    early = _scan_stdout(iter(stdout_lines), state, query)
    if early is not None:
        logger.debug(f"Terminal resolver message: {early.message}")
        return early

    _scan_stderr(stderr_lines, state, query)

    if not state.has_address():
        raise ParseError(NO_ADDRESS)

    return Outcome.from_state(state)


def check_expected_address(outcome: Outcome, query: Query) -> Outcome:
    """Turn an OK outcome CRITICAL when the address is not the expected one.

    Only applies to an outcome that is still OK once the resolver's exit
    status has been taken into account.

    Examples:
        >>> q = Query(host_name="example.com", expected_address="1.2.3.4")
        >>> check_expected_address(Outcome(ServiceState.OK, "5.6.7.8"), q).message
        'expected 1.2.3.4 but got 5.6.7.8'
    """
    if (
        not outcome.is_ok()
        or not query.expected_address
        or outcome.address == query.expected_address
    ):
        return outcome

    return Outcome(
        severity=ServiceState.CRITICAL,
        address=outcome.address,
        message=f"expected {query.expected_address} but got {outcome.address}",
    )
