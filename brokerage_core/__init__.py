"""
Brokerage Core Package.

This package implements node-position metrics for social networks:

- Burt's structural-holes constraint (investment proportions, dyadic and
  aggregate constraint)
- Gould-Fernandez brokerage role counts (coordinator, gatekeeper,
  representative, liaison, cosmopolitan)
- A graph access layer that lets every algorithm read native graphs,
  networkx graphs and numpy adjacency matrices uniformly
- A YAML loader for small network descriptions
"""

__version__ = "0.1.0"

from .config import AnalysisConfig
from .enums import Mode, Role
from .errors import BoundsError, BrokerageError, ValidationError
from .graph import Edge, Graph, GraphView, MatrixGraph, NetworkXGraph, as_graph_view
from .investment import InvestmentCache, investment, investment_sum
from .constraint import constraint, constraints, dyadconstraint
from .groups import resolve_groups
from .results import (
    BrokerageCounts,
    BrokerageResult,
    coordinator,
    cosmopolitan,
    gatekeeper,
    liaison,
    representative,
    total_brokerage,
)
from .brokerage import brokerage, brokerage_roles, classify_role
from .loader import Network, load_from_dict, load_from_file, load_from_yaml
