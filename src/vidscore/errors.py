"""Exceptions raised by vidscore.

Every failure is recoverable: callers catch these, report the message and
carry on with the catalog and history untouched.
"""


class VidscoreError(Exception):
    """Base class for all vidscore errors."""

    pass


class ValidationError(VidscoreError):
    """Rejected user input (bad URL, negative counters, duplicate, empty name)."""

    pass


class FetchError(VidscoreError):
    """Error while fetching video statistics from the platform API."""

    pass


class ImportFormatError(VidscoreError):
    """An import file is not a valid analysis export."""

    pass
