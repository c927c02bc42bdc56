"""
Configuration objects for the analysis engines.

Exposes tunable defaults for directionality, edge-weight handling and
diagnostic logging, enabling experiments without editing core logic.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .enums import Mode


@dataclass
class AnalysisConfig:
    """
    Configuration shared by the graph adapters and the engines.

    Defaults reproduce the documented behavior, so passing no config is
    always valid.
    """

    # Mode used when an engine call passes mode=None
    default_mode: str = "both"

    # Edge attribute holding weights on networkx graphs and in loaded networks
    weight_key: str = "weight"

    # Reject non-positive or non-finite weights when an adapter is built
    validate_weights: bool = True

    # When > 0, the full-graph brokerage pass logs progress every N egos
    progress_every: int = 0

    # Directedness of bare numpy matrices; None infers it from asymmetry
    matrix_directed: Optional[bool] = None


DEFAULT_CONFIG = AnalysisConfig()


def resolve_config(config: AnalysisConfig | None) -> AnalysisConfig:
    """Return ``config`` or the module default when it is None."""
    return config if config is not None else DEFAULT_CONFIG


def resolve_mode(mode: Mode | str | None, config: AnalysisConfig | None = None) -> Mode:
    """Parse ``mode``, falling back to the configured default when it is None."""
    if mode is None:
        mode = resolve_config(config).default_mode
    return Mode.parse(mode)
