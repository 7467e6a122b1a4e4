"""Host name and address validation for check arguments."""

import ipaddress

import dns.exception
import dns.name


# Longest argument accepted for any host, server or address option
MAX_ADDRESS_LENGTH = 255


def is_valid_ipv4(ip: str) -> bool:
    """Validate if string is a valid IPv4 address.

    Args:
        ip: IP address string to validate.

    Returns:
        bool: True if valid IPv4, False otherwise.

    Examples:
        >>> is_valid_ipv4("203.0.113.45")
        True
        >>> is_valid_ipv4("256.0.0.1")
        False
        >>> is_valid_ipv4("::1")
        False
    """
    try:
        addr = ipaddress.ip_address(ip)
        return isinstance(addr, ipaddress.IPv4Address)
    except ValueError:
        return False


def is_ip_address(value: str) -> bool:
    """Check if string is an IPv4 or IPv6 address literal.

    Examples:
        >>> is_ip_address("2001:db8::1")
        True
        >>> is_ip_address("example.com")
        False
    """
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def is_valid_hostname(name: str) -> bool:
    """Validate DNS name syntax (label and total length limits).

    Args:
        name: Host or domain name, with or without trailing dot.

    Returns:
        bool: True if dnspython accepts the name, False otherwise.
    """
    if not name or name.strip() != name:
        return False
    try:
        dns.name.from_text(name)
    except dns.exception.DNSException:
        return False
    return True


def is_host(value: str) -> bool:
    """Check if value is usable as a query name or server.

    Args:
        value: Command-line argument to validate.

    Returns:
        bool: True for address literals and syntactically valid DNS names.

    Examples:
        >>> is_host("8.8.8.8")
        True
        >>> is_host("www.example.com")
        True
        >>> is_host("bad..name")
        False
    """
    if not value or len(value) > MAX_ADDRESS_LENGTH:
        return False
    return is_ip_address(value) or is_valid_hostname(value)
