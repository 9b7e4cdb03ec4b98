"""Exception types raised by the neofit core."""

from __future__ import annotations


class NeofitError(Exception):
    """Base class for all neofit errors."""


class ValidationError(NeofitError, ValueError):
    """Invalid input to a state mutation (weight, duration, calories).

    Raised before the store is touched, so the state is left unchanged.
    """


class InvalidArgument(NeofitError, ValueError):
    """Programming-level misuse, e.g. an unknown activity level key."""
