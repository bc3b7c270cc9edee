"""Failure values and setup errors for the whale navigation core.

Out-of-bounds projections and blocked segments are ordinary outcomes of
movement queries, so they are returned as values rather than raised. Both
values are falsy, which lets callers write ``if not result:``.

A malformed grid extent is a setup problem and is raised instead.
"""
import enum


class Failure(enum.Enum):
    """Distinguished failure results returned by projection and tracing."""

    OUT_OF_BOUNDS = 'out_of_bounds'
    NO_PATH = 'no_path'

    def __bool__(self):
        return False

    def __repr__(self):
        return self.name


OUT_OF_BOUNDS = Failure.OUT_OF_BOUNDS
NO_PATH = Failure.NO_PATH


class ExtentConfigurationError(ValueError):
    """Raised when a grid extent violates its geometric invariants."""
