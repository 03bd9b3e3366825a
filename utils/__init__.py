"""
Utils package
Utility functions and helpers
"""

from .validators import is_valid_ip, parse_ip, normalize_fields
from .helpers import (
    reverse_dns,
    strip_trailing_dot,
    get_client_ip,
    debug_info
)
from .rwlock import ReadWriteLock
from .logger import setup_logger

__all__ = [
    'is_valid_ip',
    'parse_ip',
    'normalize_fields',
    'reverse_dns',
    'strip_trailing_dot',
    'get_client_ip',
    'debug_info',
    'ReadWriteLock',
    'setup_logger'
]
