"""Exception hierarchy for Commit Ledger.

Every error aborts the current operation and propagates to the caller.
"""


class LedgerError(Exception):
    """Base exception for ledger errors."""

    pass


class RepositoryAccessError(LedgerError):
    """Repository cannot be opened, has no HEAD, or an object is unreadable."""

    pass


class DiffComputationError(LedgerError):
    """Diffing two trees failed."""

    pass


class ResultFileError(LedgerError):
    """A saved result cannot be read, parsed, or written."""

    pass
