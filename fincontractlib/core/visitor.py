"""Generic traversal over contract trees.

The Visitor owns the walking contract: it classifies each node, visits
children left before right, and hands their results to a kind-specific
hook once they are all computed. What the hooks do is entirely up to
subclasses, so serializers, renderers and evaluators are all just
Visitors with different hooks.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Tuple, TypeVar

from ..config import TraversalConfig, TraversalStrategy
from ..errors import ConfigurationError, FincontractError
from ..policies import FailFastPolicy, UnknownNodePolicy
from .node import ContractNode, NodeKind

logger = logging.getLogger(__name__)

R = TypeVar('R')


# Hook called for each kind. Binary hooks receive (node, left, right),
# unary hooks (node, child), terminal hooks (node).
_HOOKS = {
    NodeKind.AND: 'process_and_node',
    NodeKind.OR: 'process_or_node',
    NodeKind.IF: 'process_if_node',
    NodeKind.TIMEBOUND: 'process_timebound_node',
    NodeKind.GIVE: 'process_give_node',
    NodeKind.SCALE_OBS: 'process_scale_obs_node',
    NodeKind.SCALE: 'process_scale_node',
    NodeKind.ONE: 'process_one_node',
    NodeKind.ZERO: 'process_zero_node',
}

_missing = set(NodeKind) - set(_HOOKS)
if _missing:
    raise TypeError(f"No visitor hook registered for node kinds: {sorted(k.name for k in _missing)}")


def node_kind(node: Any) -> Optional[NodeKind]:
    """Return the NodeKind of ``node``, or None if it is not one of the nine."""
    if not isinstance(node, ContractNode):
        return None
    kind = type(node).kind
    return kind if isinstance(kind, NodeKind) else None


class Visitor(ABC, Generic[R]):
    """Abstract base class for contract traversals.

    Subclasses implement one hook per node kind. The result type ``R``
    is chosen by the subclass; the dispatcher only moves results from
    children to parents.

    Guarantees:
    - every node is visited exactly once
    - child 0 is fully visited before child 1
    - a node's hook runs only after all of its children's hooks
    - nodes outside the nine kinds go to ``process_unknown_node`` and
      are never descended into
    """

    def __init__(self, config: Optional[TraversalConfig] = None):
        """Initialize visitor with an optional configuration.

        Args:
            config: TraversalConfig (defaults to TraversalConfig())

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        self.config = config if config is not None else TraversalConfig()
        problems = self.config.validate()
        if problems:
            raise ConfigurationError(problems)
        self.unknown_policy = self.config.unknown_policy or self.default_policy()

    def default_policy(self) -> UnknownNodePolicy:
        """Policy used when the config does not name one."""
        return FailFastPolicy()

    def visit(self, node: Any) -> R:
        """Traverse the tree rooted at ``node`` and return the root's result.

        Args:
            node: Root of a well-formed contract tree

        Returns:
            Result of the root node's hook
        """
        self.unknown_policy.begin()
        if self.config.strategy is TraversalStrategy.ITERATIVE:
            return self._visit_iterative(node)
        return self._visit_recursive(node, 1)

    def _check_depth(self, depth: int) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise FincontractError(f"Contract tree deeper than max_depth={max_depth}")

    def _visit_recursive(self, node: Any, depth: int) -> R:
        self._check_depth(depth)
        kind = node_kind(node)

        if kind is None:
            return self.process_unknown_node(node)

        hook = getattr(self, _HOOKS[kind])
        if kind.is_binary:
            left = self._visit_recursive(node.children[0], depth + 1)
            right = self._visit_recursive(node.children[1], depth + 1)
            return hook(node, left, right)
        if kind.is_unary:
            child = self._visit_recursive(node.children[0], depth + 1)
            return hook(node, child)
        return hook(node)

    def _visit_iterative(self, root: Any) -> R:
        # Each entry is (node, depth, expanded). A node is pushed once to
        # schedule its children and once more to combine their results.
        stack: List[Tuple[Any, int, bool]] = [(root, 1, False)]
        results: List[Any] = []

        while stack:
            node, depth, expanded = stack.pop()
            kind = node_kind(node)

            if kind is None:
                self._check_depth(depth)
                results.append(self.process_unknown_node(node))
                continue

            arity = kind.arity
            if expanded or arity == 0:
                if not expanded:
                    self._check_depth(depth)
                args = results[len(results) - arity:] if arity else []
                del results[len(results) - arity:]
                results.append(getattr(self, _HOOKS[kind])(node, *args))
                continue

            self._check_depth(depth)
            stack.append((node, depth, True))
            # Reversed so child 0 is popped, and finished, first
            for child in reversed(node.children):
                stack.append((child, depth + 1, False))

        return results[0]

    def unknown_result(self, node: Any) -> Any:
        """Neutral result substituted for an unknown node by lenient policies."""
        return None

    def process_unknown_node(self, node: Any) -> R:
        """Fallback for nodes outside the nine known kinds.

        Delegates to the configured UnknownNodePolicy.
        """
        logger.debug("%s: routing unknown node %r to %s",
                     type(self).__name__, node, type(self.unknown_policy).__name__)
        return self.unknown_policy.handle(node, self)

    @abstractmethod
    def process_and_node(self, node: ContractNode, left: R, right: R) -> R:
        pass

    @abstractmethod
    def process_or_node(self, node: ContractNode, left: R, right: R) -> R:
        pass

    @abstractmethod
    def process_if_node(self, node: ContractNode, left: R, right: R) -> R:
        pass

    @abstractmethod
    def process_timebound_node(self, node: ContractNode, child: R) -> R:
        pass

    @abstractmethod
    def process_give_node(self, node: ContractNode, child: R) -> R:
        pass

    @abstractmethod
    def process_scale_obs_node(self, node: ContractNode, child: R) -> R:
        pass

    @abstractmethod
    def process_scale_node(self, node: ContractNode, child: R) -> R:
        pass

    @abstractmethod
    def process_one_node(self, node: ContractNode) -> R:
        pass

    @abstractmethod
    def process_zero_node(self, node: ContractNode) -> R:
        pass
