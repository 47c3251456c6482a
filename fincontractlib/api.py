"""High-level API for FincontractLib.

This module provides simple, functional interfaces for common contract
analyses. These functions wrap the visitor classes for ease of use in
simple cases; subclass a Visitor directly for anything more specific.
"""

from collections import Counter
from typing import Any, Dict, List, Optional

from .config import TraversalConfig
from .core.collector import (
    CurrencyCollector,
    DepthMeasurer,
    KindCounter,
    NodeCounter,
    ObservableCollector,
)
from .core.node import ContractNode, NodeKind
from .render import DotRenderer, ExpressionRenderer


def _unique(items: List[Any]) -> List[Any]:
    # First occurrence wins, order preserved
    return list(dict.fromkeys(items))


def collect_currencies(
    root: ContractNode,
    unique: bool = False,
    config: Optional[TraversalConfig] = None
) -> List[str]:
    """Collect the currencies of all One nodes, left to right.

    Args:
        root: Root of the contract tree
        unique: Drop repeated currencies, keeping first occurrences
        config: Optional traversal configuration

    Returns:
        List of currency identifiers

    Example:
        >>> collect_currencies(And(One("USD"), Give(Scale(2, One("EUR")))))
        ['USD', 'EUR']
    """
    currencies = CurrencyCollector(config).visit(root)
    return _unique(currencies) if unique else currencies


def collect_observables(
    root: ContractNode,
    include_bounds: bool = False,
    unique: bool = False,
    config: Optional[TraversalConfig] = None
) -> List[str]:
    """Collect observable names referenced by If and ScaleObs nodes.

    Args:
        root: Root of the contract tree
        include_bounds: Also collect string bounds of Timebound nodes
        unique: Drop repeated names, keeping first occurrences
        config: Optional traversal configuration

    Returns:
        List of observable names, each parent's ahead of its children's
    """
    observables = ObservableCollector(config, include_bounds=include_bounds).visit(root)
    return _unique(observables) if unique else observables


def count_nodes(root: ContractNode, config: Optional[TraversalConfig] = None) -> int:
    """Count the nodes in a contract tree."""
    return NodeCounter(config).visit(root)


def count_kinds(root: ContractNode, config: Optional[TraversalConfig] = None) -> Counter:
    """Count the nodes of each kind in a contract tree."""
    return KindCounter(config).visit(root)


def tree_depth(root: ContractNode, config: Optional[TraversalConfig] = None) -> int:
    """Measure the depth of a contract tree (a lone terminal has depth 1)."""
    return DepthMeasurer(config).visit(root)


def render_expression(root: ContractNode, config: Optional[TraversalConfig] = None) -> str:
    """Render a contract tree as combinator text."""
    return ExpressionRenderer(config).visit(root)


def render_dot(
    root: ContractNode,
    graph_name: str = "fincontract",
    config: Optional[TraversalConfig] = None
) -> str:
    """Render a contract tree as Graphviz DOT source."""
    return DotRenderer(config, graph_name=graph_name).render(root)


def get_tree_stats(root: ContractNode, config: Optional[TraversalConfig] = None) -> Dict[str, Any]:
    """Get statistics about a contract tree.

    Args:
        root: Root of the contract tree
        config: Optional traversal configuration

    Returns:
        Dictionary with statistics:
        - total_nodes: Total number of nodes
        - depth: Depth of the tree
        - kinds: Node count per kind name (all nine kinds present)
        - currencies: Distinct currencies in order of appearance
        - observables: Distinct observables in order of appearance
    """
    kinds = count_kinds(root, config)
    return {
        'total_nodes': sum(kinds.values()),
        'depth': tree_depth(root, config),
        'kinds': {kind.value: kinds.get(kind, 0) for kind in NodeKind},
        'currencies': collect_currencies(root, unique=True, config=config),
        'observables': collect_observables(root, include_bounds=True, unique=True, config=config),
    }
