# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception hierarchy for everything that can go wrong while
#   decoding the database or refreshing it.
#
# CLASSES:
# --------
# - UASParserError        → base class
# - MalformedDatabase     → decode-time structural failure
# - LockUnavailable       → lock held by a live process
# - NetworkError          → any remote fetch failure
# - IntegrityMismatch     → downloaded payload failed its SHA-1 check
# - PersistenceError      → database/lock file I/O failure
#
# The classifier never raises. The updater never raises either:
# it returns these inside a RefreshResult.
# ==============================================


class UASParserError(Exception):
    """Base class for all uas_parser errors."""


class MalformedDatabase(UASParserError):
    """The database text could not be turned into a Store."""

    def __init__(self, message: str, line_number: int = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class LockUnavailable(UASParserError):
    """Another process holds a lock that is not old enough to steal."""


class NetworkError(UASParserError):
    """A remote endpoint could not be reached or answered with an error."""


class IntegrityMismatch(UASParserError):
    """The SHA-1 of the downloaded payload does not match the published one."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Checksum mismatch (expected: {expected}, got: {actual})")
        self.expected = expected
        self.actual = actual


class PersistenceError(UASParserError):
    """Reading, writing or stat-ing a file failed."""
