"""
Service Exceptions
Error taxonomy of the lookup service
"""


class IPWhereError(Exception):
    """Base class for all lookup service errors"""


class DatabaseOpenError(IPWhereError):
    """A database file could not be opened at startup"""

    def __init__(self, dataset, path, cause):
        self.dataset = dataset
        self.path = path
        self.cause = cause
        super().__init__(f"failed to open {dataset} database ({path}): {cause}")


class DatabaseCloseError(IPWhereError):
    """One or more database readers failed to close"""

    def __init__(self, errors):
        self.errors = errors
        details = ", ".join(f"{dataset}: {err}" for dataset, err in errors)
        super().__init__(f"errors closing databases: {details}")


class InvalidIPError(IPWhereError, ValueError):
    """The input is not a valid IPv4 or IPv6 address"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid IP address: {value!r}")


class LookupFailedError(IPWhereError):
    """Neither database could answer the query"""


class ServiceClosedError(LookupFailedError):
    """The lookup service has been closed"""
