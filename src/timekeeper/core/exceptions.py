"""Domain errors raised by the timekeeping core.

Every service operation either succeeds or raises one of these after
rolling back its transaction.
"""


class TimekeeperError(Exception):
    """Base class for all core errors."""


class NotFoundError(TimekeeperError):
    """A referenced project or timer does not exist."""

    def __init__(self, entity: str, unique_id: str | None = None):
        self.entity = entity
        self.unique_id = unique_id
        if unique_id is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} '{unique_id}' not found")


class InvariantViolationError(TimekeeperError):
    """The operation would break a single-current or uniqueness invariant."""


class NoCurrentTimerError(TimekeeperError):
    """Stop was requested but no timer is running."""

    def __init__(self, message: str = "No timer is currently running"):
        super().__init__(message)


class AlreadyFinishedError(NoCurrentTimerError):
    """Stop was requested for a specific timer that has already finished."""

    def __init__(self, unique_id: str):
        self.unique_id = unique_id
        super().__init__(f"Timer '{unique_id}' has already finished")


class InvalidTimezoneError(TimekeeperError, ValueError):
    """The supplied name is not a known IANA time zone."""

    def __init__(self, name: str, reason: str | None = None):
        self.name = name
        message = f"Unknown time zone: {name!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MigrationError(TimekeeperError):
    """Applying schema migrations failed. Startup must not continue."""


class StoreUnavailableError(TimekeeperError):
    """The store timed out or dropped the connection. Safe to retry."""
