"""FincontractLib - Traversal engine for financial contract trees.

FincontractLib models contracts built from a small set of combinators
(One, Zero, Give, Scale, ScaleObs, Timebound, And, Or, If) as immutable
trees, and provides a generic Visitor for walking them. Every analysis -
collecting currencies, counting nodes, rendering text or Graphviz - is a
Visitor subclass that overrides one hook per node kind.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from fincontractlib import And, One, Give, Scale, collect_currencies

    contract = And(One("USD"), Give(Scale(2, One("EUR"))))
    collect_currencies(contract)        # ['USD', 'EUR']
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

# Library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import (
    FincontractError,
    MalformedContractError,
    UnknownNodeError,
    ConfigurationError,
)
from .policies import (
    UnknownNodePolicy,
    FailFastPolicy,
    SkipUnknownPolicy,
    CollectUnknownPolicy,
    ThresholdPolicy,
)
from .config import TraversalConfig, TraversalStrategy
from .core import (
    NodeKind,
    ContractNode,
    One,
    Zero,
    Give,
    Scale,
    ScaleObs,
    Timebound,
    And,
    Or,
    If,
    OR_FIRST,
    OR_SECOND,
    Visitor,
    node_kind,
    CollectingVisitor,
    CurrencyCollector,
    ObservableCollector,
    AggregateVisitor,
    NodeCounter,
    DepthMeasurer,
    KindCounter,
)
from .render import ExpressionRenderer, DotRenderer
from .caching import CachedTraversal
from .api import (
    collect_currencies,
    collect_observables,
    count_nodes,
    count_kinds,
    tree_depth,
    render_expression,
    render_dot,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Errors
    "FincontractError",
    "MalformedContractError",
    "UnknownNodeError",
    "ConfigurationError",
    # Policies
    "UnknownNodePolicy",
    "FailFastPolicy",
    "SkipUnknownPolicy",
    "CollectUnknownPolicy",
    "ThresholdPolicy",
    # Config
    "TraversalConfig",
    "TraversalStrategy",
    # Nodes
    "NodeKind",
    "ContractNode",
    "One",
    "Zero",
    "Give",
    "Scale",
    "ScaleObs",
    "Timebound",
    "And",
    "Or",
    "If",
    "OR_FIRST",
    "OR_SECOND",
    # Traversals
    "Visitor",
    "node_kind",
    "CollectingVisitor",
    "CurrencyCollector",
    "ObservableCollector",
    "AggregateVisitor",
    "NodeCounter",
    "DepthMeasurer",
    "KindCounter",
    "ExpressionRenderer",
    "DotRenderer",
    "CachedTraversal",
    # API
    "collect_currencies",
    "collect_observables",
    "count_nodes",
    "count_kinds",
    "tree_depth",
    "render_expression",
    "render_dot",
    "get_tree_stats",
]
