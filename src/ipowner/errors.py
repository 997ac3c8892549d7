"""
Exceptions raised by IPOwner.

Lookup misses never raise; they surface as absent fields. Only bad
input and unusable data sources reach the caller.
"""


class IPOwnerError(Exception):
    """Base exception for IPOwner errors."""
    pass


class InvalidAddressError(IPOwnerError, ValueError):
    """An input string is not a valid IP address."""

    def __init__(self, text: str, reason: str | None = None):
        self.text = text
        self.reason = reason
        message = f"Invalid IP address: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DataSourceError(IPOwnerError):
    """A data set needed at start-up is missing or unreadable."""

    def __init__(self, source: str, path: str, reason: str):
        self.source = source
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load {source} from {path}: {reason}")
