"""
RateSense exception hierarchy.

All ratesense exceptions inherit from RateSenseError, making it easy for
callers to catch library-level errors while still distinguishing specific
failure modes.

The simulation engines themselves raise nothing under valid input: a run
that cannot pay off a balance is reported through its result value
(``paid_off=False``, ``breakeven_month=None``), never as an exception.
"""


class RateSenseError(Exception):
    """Base exception class for all ratesense errors."""


class ConfigurationError(RateSenseError):
    """Raised for configuration errors (missing keys, invalid values)."""


class InvalidInputError(RateSenseError, ValueError):
    """Raised when calculator inputs are rejected before a simulation runs.

    The message is meant to be shown to the user as-is
    (e.g. "Principal must be greater than 0.").
    """


class FileIOError(RateSenseError):
    """Raised for file I/O errors (exports, config files)."""
