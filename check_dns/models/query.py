"""Resolution query model."""

from dataclasses import dataclass

from check_dns.utils.host_utils import is_ip_address


@dataclass(frozen=True)
class Query:
    """One resolution request, immutable for the lifetime of a check.

    Attributes:
        host_name: Name or address to resolve.
        dns_server: Name server to query (system default when None).
        reverse_server: Name server used for reverse lookups of address literals.
        expected_address: Address the resolver is expected to return.
        timeout_seconds: Wall-clock limit for the whole resolution.
    """

    host_name: str
    dns_server: str | None = None
    reverse_server: str | None = None
    expected_address: str | None = None
    timeout_seconds: int = 10

    def __post_init__(self) -> None:
        if not self.host_name:
            raise ValueError("host_name cannot be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than 0")

    @property
    def server_label(self) -> str:
        """Server name as shown in diagnostics (empty when none was given)."""
        return self.dns_server or ""

    @property
    def resolver_server(self) -> str | None:
        """Server argument handed to the resolver command.

        Returns:
            str | None: The DNS server if set, else the reverse server when the
            query is an address literal, else None.
        """
        if self.dns_server:
            return self.dns_server
        if self.reverse_server and is_ip_address(self.host_name):
            return self.reverse_server
        return None
