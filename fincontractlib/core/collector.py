"""Collecting and aggregating traversals for FincontractLib.

CollectingVisitor folds a tree into an ordered list. By itself it
collects nothing; subclasses override the hooks at the nodes they care
about and inherit order-preserving composition everywhere else.

AggregateVisitor folds a tree into a single value per subtree, the way
node counts and depths are computed.
"""

from abc import abstractmethod
from collections import Counter
from typing import Any, List

from ..policies import SkipUnknownPolicy, UnknownNodePolicy
from .node import ContractNode
from .visitor import Visitor


class CollectingVisitor(Visitor[List[Any]]):
    """Accumulates an ordered list of items bottom-up.

    - binary nodes: left items followed by right items (no dedup)
    - unary nodes: the child's items unchanged
    - terminal nodes: nothing
    """

    def default_policy(self) -> UnknownNodePolicy:
        return SkipUnknownPolicy()

    def unknown_result(self, node: Any) -> List[Any]:
        return []

    def process_and_node(self, node, left, right):
        return left + right

    def process_if_node(self, node, left, right):
        return left + right

    def process_or_node(self, node, left, right):
        return left + right

    def process_timebound_node(self, node, child):
        return child

    def process_give_node(self, node, child):
        return child

    def process_scale_obs_node(self, node, child):
        return child

    def process_scale_node(self, node, child):
        return child

    def process_one_node(self, node):
        return []

    def process_zero_node(self, node):
        return []


class CurrencyCollector(CollectingVisitor):
    """Collects the currency of every One node, left to right.

    Duplicates are kept; use ``api.collect_currencies(unique=True)`` for
    a de-duplicated list.
    """

    def process_one_node(self, node):
        return [node.currency]


class ObservableCollector(CollectingVisitor):
    """Collects observable names referenced by the tree.

    An If or ScaleObs node emits its observable ahead of its children's
    items. With ``include_bounds`` Timebound bounds that name an
    observable (strings) are emitted too, lower before upper.
    """

    def __init__(self, config=None, include_bounds: bool = False):
        super().__init__(config)
        self.include_bounds = include_bounds

    def process_if_node(self, node, left, right):
        return [node.observable] + left + right

    def process_scale_obs_node(self, node, child):
        return [node.observable] + child

    def process_timebound_node(self, node, child):
        if not self.include_bounds:
            return child
        bounds = [b for b in (node.lower, node.upper) if isinstance(b, str)]
        return bounds + child


class AggregateVisitor(Visitor[Any]):
    """Base class for traversals that reduce every subtree to one value.

    Subclasses implement ``aggregate`` (combine a node with its children's
    values). All nine hooks route through it.
    """

    def default_policy(self) -> UnknownNodePolicy:
        return SkipUnknownPolicy()

    @abstractmethod
    def aggregate(self, node: ContractNode, values: List[Any]) -> Any:
        """Combine a node with the values of its children.

        Args:
            node: The node being processed
            values: Children's values in positional order (may be empty)

        Returns:
            Aggregated value for the subtree rooted at ``node``
        """
        pass

    def process_and_node(self, node, left, right):
        return self.aggregate(node, [left, right])

    def process_or_node(self, node, left, right):
        return self.aggregate(node, [left, right])

    def process_if_node(self, node, left, right):
        return self.aggregate(node, [left, right])

    def process_timebound_node(self, node, child):
        return self.aggregate(node, [child])

    def process_give_node(self, node, child):
        return self.aggregate(node, [child])

    def process_scale_obs_node(self, node, child):
        return self.aggregate(node, [child])

    def process_scale_node(self, node, child):
        return self.aggregate(node, [child])

    def process_one_node(self, node):
        return self.aggregate(node, [])

    def process_zero_node(self, node):
        return self.aggregate(node, [])


class NodeCounter(AggregateVisitor):
    """Counts the known nodes in a tree. Unknown nodes count as 0."""

    def unknown_result(self, node):
        return 0

    def aggregate(self, node, values):
        return 1 + sum(values)


class DepthMeasurer(AggregateVisitor):
    """Measures tree depth; a lone terminal has depth 1."""

    def unknown_result(self, node):
        return 0

    def aggregate(self, node, values):
        return 1 + max(values, default=0)


class KindCounter(AggregateVisitor):
    """Counts nodes per NodeKind."""

    def unknown_result(self, node):
        return Counter()

    def aggregate(self, node, values):
        counts: Counter = Counter({node.kind: 1})
        for value in values:
            counts.update(value)
        return counts
