"""
Services package
IP lookup and field projection
"""

from .geo import LookupService
from .projector import project, PROJECTABLE_FIELDS
from .exceptions import (
    IPWhereError,
    DatabaseOpenError,
    DatabaseCloseError,
    InvalidIPError,
    LookupFailedError,
    ServiceClosedError
)

__all__ = [
    'LookupService',
    'project',
    'PROJECTABLE_FIELDS',
    'IPWhereError',
    'DatabaseOpenError',
    'DatabaseCloseError',
    'InvalidIPError',
    'LookupFailedError',
    'ServiceClosedError'
]
