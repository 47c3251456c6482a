"""Core abstractions for FincontractLib.

This module contains the contract node model and the traversal base
classes everything else is built on.
"""

from .node import (
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
)
from .visitor import Visitor, node_kind
from .collector import (
    CollectingVisitor,
    CurrencyCollector,
    ObservableCollector,
    AggregateVisitor,
    NodeCounter,
    DepthMeasurer,
    KindCounter,
)

__all__ = [
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
    "Visitor",
    "node_kind",
    "CollectingVisitor",
    "CurrencyCollector",
    "ObservableCollector",
    "AggregateVisitor",
    "NodeCounter",
    "DepthMeasurer",
    "KindCounter",
]
