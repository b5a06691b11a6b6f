# Exception types for the infrastress engine
#
# Configuration problems keep raising the built-in KeyError / ValueError /
# FileNotFoundError from the settings loader. These cover the run-time
# failures an orchestrating caller needs to tell apart.


class InfrastressError(Exception):
    """Base class for errors raised by the engine."""


class ScenarioValidationError(InfrastressError, ValueError):
    """Scenario parameters were rejected by validate_params()."""


class DataFetchError(InfrastressError):
    """The historical data source failed to return records.

    The message carries the upstream error text unchanged so callers can
    surface it as-is.
    """

    def __init__(self, message, domain=None):
        super().__init__(message)
        self.domain = domain


class RateLimitExceeded(InfrastressError):
    """An injected rate limiter denied the request for this client key."""

    def __init__(self, key, retry_after_seconds=0.0):
        super().__init__(f"Rate limit exceeded for '{key}'")
        self.key = key
        self.retry_after_seconds = retry_after_seconds
