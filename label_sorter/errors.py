"""Exception types shared across label-sorter.

Filesystem failures are reported with Python's own ``OSError`` and are not
wrapped here.
"""


class LabelSorterError(Exception):
    """Base class for label-sorter errors."""


class ConfigError(LabelSorterError):
    """Label source or config file is unreadable or unusable."""


class ValidationError(LabelSorterError, ValueError):
    """Malformed client input."""


class ArchiveError(LabelSorterError):
    """The shutdown archive could not be written."""


class ServiceUnavailableError(LabelSorterError):
    """The service is draining and no longer accepts work."""
