"""
Helper Functions Module
Utility helper functions for IPWhere
"""

import logging

import dns.exception
import dns.resolver
import dns.reversename

from utils.validators import is_valid_ip

logger = logging.getLogger("ipwhere.dns")

# Proxy headers reported by the debug endpoint
PROXY_HEADERS = {
    'xForwardedFor': 'X-Forwarded-For',
    'xRealIP': 'X-Real-IP',
    'xAzureClientIP': 'X-Azure-ClientIP',
    'xOriginalHost': 'X-Original-Host',
    'xClientIP': 'X-Client-IP',
    'cfConnectingIP': 'CF-Connecting-IP',
    'trueClientIP': 'True-Client-IP',
    'forwardedHeader': 'Forwarded',
}


def reverse_dns(ip, timeout=2.0, resolver=None):
    """
    Perform reverse DNS lookup for IP address

    Args:
        ip: IP address string
        timeout: Total time budget for the PTR query, in seconds
        resolver: dns.resolver.Resolver to use (optional)

    Returns:
        Hostname string without the trailing dot, or None if lookup fails

    Example:
        >>> reverse_dns("8.8.8.8")
        'dns.google'
    """
    try:
        resolver = resolver or dns.resolver.get_default_resolver()
        query = dns.reversename.from_address(ip)
        answer = resolver.resolve(query, 'PTR', lifetime=timeout)
    except (dns.exception.DNSException, ValueError, OSError) as e:
        logger.debug("Reverse DNS failed for %s: %s", ip, e)
        return None

    names = [rdata.to_text() for rdata in answer]
    if not names:
        return None

    return strip_trailing_dot(names[0]) or None


def strip_trailing_dot(hostname):
    """
    Remove a single trailing dot from a fully qualified name

    Example:
        >>> strip_trailing_dot('dns.google.')
        'dns.google'
    """
    if hostname.endswith('.'):
        return hostname[:-1]
    return hostname


def get_client_ip(headers, remote_addr):
    """
    Detect the client IP behind proxies

    Priority: first X-Forwarded-For entry > X-Real-IP > remote address.
    Header values are only trusted when they parse as an IP.

    Args:
        headers: Request headers mapping
        remote_addr: Socket peer address (may carry a port)

    Returns:
        IP address string (unvalidated when it comes from remote_addr)
    """
    xff = headers.get('X-Forwarded-For', '')
    if xff:
        first = xff.split(',')[0].strip()
        if is_valid_ip(first):
            return first

    xri = headers.get('X-Real-IP', '').strip()
    if xri and is_valid_ip(xri):
        return xri

    return split_host(remote_addr or '')


def split_host(addr):
    """
    Strip a port from a "host:port" or "[v6]:port" address

    Example:
        >>> split_host('192.168.1.1:12345')
        '192.168.1.1'
        >>> split_host('[::1]:8080')
        '::1'
        >>> split_host('10.0.0.1')
        '10.0.0.1'
    """
    if is_valid_ip(addr):
        return addr

    if addr.startswith('['):
        host, sep, _ = addr[1:].partition(']')
        if sep:
            return host

    host, sep, port = addr.rpartition(':')
    if sep and port.isdigit() and ':' not in host:
        return host

    return addr


def debug_info(headers, remote_addr, host, request_uri):
    """
    Collect connection details used to diagnose proxy setups

    Returns:
        Dictionary with headers, proxy header values and detected client IP
    """
    info = {
        'remoteAddr': remote_addr,
        'host': host,
        'requestURI': request_uri,
        'headers': {},
    }
    # repeated headers report their first value
    for name, value in headers.items():
        info['headers'].setdefault(name, value)
    for key, header in PROXY_HEADERS.items():
        info[key] = headers.get(header, '')
    info['detectedClientIP'] = get_client_ip(headers, remote_addr)
    return info
