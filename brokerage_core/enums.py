"""
Core enumerations for structural-hole and brokerage analysis.

This module defines the directionality policy used by the investment and
constraint calculations and the five Gould-Fernandez brokerage roles.
"""

from enum import Enum

from .errors import ValidationError


class Mode(Enum):
    """
    Directionality policy for tie-strength (investment) calculations.

    - BOTH: in- and out-ties are pooled, ``w(i,j) + w(j,i)``
    - OUT: only ties sent by the focal node
    - IN: only ties received by the focal node

    On undirected graphs the three modes give identical results.
    """

    BOTH = "both"
    """Pool incoming and outgoing ties."""

    OUT = "out"
    """Use outgoing ties only."""

    IN = "in"
    """Use incoming ties only."""

    @classmethod
    def parse(cls, value) -> "Mode":
        """
        Coerce a `Mode` or its string value into a `Mode`.

        Raises:
            ValidationError: If ``value`` names no known mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(repr(m.value) for m in cls)
        raise ValidationError(f"Unknown mode {value!r}; expected one of {valid}")


class Role(Enum):
    """
    Gould-Fernandez brokerage roles for a mediated triad ``i -> ego -> j``.

    Values match the per-role field names of the result containers.
    """

    COORDINATOR = "coordinator"
    """All three nodes in the same group."""

    GATEKEEPER = "gatekeeper"
    """Ego and j share a group, i is an outsider."""

    REPRESENTATIVE = "representative"
    """Ego and i share a group, j is an outsider."""

    LIAISON = "liaison"
    """i and j share a group, ego is an outsider."""

    COSMOPOLITAN = "cosmopolitan"
    """All three nodes in different groups."""
