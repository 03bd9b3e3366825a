"""
Validation Utilities Module
Input validation functions for IPWhere
"""

import ipaddress


def is_valid_ip(address):
    """
    Validate if string is a valid IP address (IPv4 or IPv6)

    Args:
        address: String to validate

    Returns:
        Boolean indicating if valid IP address

    Example:
        >>> is_valid_ip("8.8.8.8")
        True
        >>> is_valid_ip("256.1.1.1")
        False
        >>> is_valid_ip("2001:4860:4860::8888")
        True
    """
    try:
        ipaddress.ip_address(address)
        return True
    except (ValueError, TypeError):
        return False


def parse_ip(address):
    """
    Parse an IP address string or object

    Args:
        address: IP address string, or an ipaddress address object

    Returns:
        ipaddress.IPv4Address / IPv6Address, or None if invalid
    """
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return address

    if not isinstance(address, str):
        return None

    try:
        return ipaddress.ip_address(address.strip())
    except (ValueError, TypeError):
        return None


def normalize_fields(fields):
    """
    Lowercase requested field names

    Args:
        fields: Iterable of field name strings

    Returns:
        List of lowercased names, blanks removed
    """
    return [f.strip().lower() for f in fields if f and f.strip()]
