"""
Exception types raised by the brokerage and constraint engines.

Every failure is raised before any result state is built, so callers never
receive a partially computed result.
"""


class BrokerageError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(BrokerageError, ValueError):
    """
    Invalid input detected before computation starts.

    Raised for malformed group assignments, unknown modes, vertices outside
    ``1..n``, invalid edge weights, and unsupported graph representations.
    """


class BoundsError(BrokerageError, IndexError):
    """A result container was indexed outside ``1..n``."""
