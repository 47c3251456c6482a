"""
Unknown-node policies for FincontractLib.

The dispatcher never fails on a node outside the nine known kinds. It
routes such nodes to ``process_unknown_node``, whose default behaviour
is to ask one of these policies what to do.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, List

from .errors import UnknownNodeError

logger = logging.getLogger(__name__)


class UnknownNodePolicy(ABC):
    """
    Base class for unknown-node policies.
    
    Subclasses decide whether an unrecognised node stops the traversal
    or is replaced by the visitor's neutral result.
    """
    
    def begin(self) -> None:
        """
        Called by Visitor.visit before each traversal.
        
        Policies that track what they saw reset that state here, so
        repeated traversals of the same tree give the same result.
        """
        pass
    
    @abstractmethod
    def handle(self, node: Any, visitor: Any) -> Any:
        """
        Handle a node the dispatcher could not classify.
        
        Args:
            node: The unrecognised node
            visitor: The traversal that met the node
            
        Returns:
            The value to use as the node's result, usually
            ``visitor.unknown_result(node)``, or raises to stop.
        """
        pass


class FailFastPolicy(UnknownNodePolicy):
    """
    Policy that raises UnknownNodeError, stopping the traversal.
    
    Default for the bare Visitor, whose result type has no neutral value.
    """
    
    def handle(self, node: Any, visitor: Any) -> Any:
        """Raise immediately."""
        raise UnknownNodeError(node)


class SkipUnknownPolicy(UnknownNodePolicy):
    """
    Policy that logs a warning and substitutes the visitor's neutral result.
    
    Default for collecting and aggregating traversals.
    """
    
    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.
        
        Args:
            verbose: If True, log a warning for every skipped node
        """
        self.verbose = verbose
        self.skipped: List[Any] = []
    
    def begin(self) -> None:
        """Forget nodes skipped by the previous traversal."""
        self.skipped.clear()
    
    def handle(self, node: Any, visitor: Any) -> Any:
        """Record the node, warn, and return the neutral result."""
        self.skipped.append(node)
        if self.verbose:
            logger.warning("Skipping unknown contract node %r in %s",
                           node, type(visitor).__name__)
        return visitor.unknown_result(node)


class CollectUnknownPolicy(UnknownNodePolicy):
    """
    Policy that silently collects unknown nodes for later inspection.
    
    Useful for validating a batch of trees and reporting at the end, so
    unlike the other policies it keeps counting across traversals. Only
    the most recent ``max_nodes`` nodes are kept; ``total`` counts all.
    """
    
    def __init__(self, max_nodes: int = 1000):
        self.nodes: Deque[Any] = deque(maxlen=max_nodes)
        self.total = 0
    
    def handle(self, node: Any, visitor: Any) -> Any:
        self.nodes.append(node)
        self.total += 1
        return visitor.unknown_result(node)
    
    def get_statistics(self) -> dict:
        """
        Get statistics about unknown nodes encountered.
        
        Returns:
            Dictionary with the count and the type names seen
        """
        return {
            'total_unknown': self.total,
            'types': sorted({type(n).__name__ for n in self.nodes}),
        }
    
    def clear(self) -> None:
        """Forget everything collected so far."""
        self.nodes.clear()
        self.total = 0


class ThresholdPolicy(UnknownNodePolicy):
    """
    Policy that tolerates unknown nodes up to a threshold, then fails fast.
    
    A few extension nodes may be expected; many of them usually mean the
    tree came from an incompatible producer.
    The threshold applies to each traversal separately.
    """
    
    def __init__(self, max_unknown: int = 10, verbose: bool = True):
        """
        Initialize the threshold policy.
        
        Args:
            max_unknown: Number of unknown nodes tolerated
            verbose: If True, log a warning for each tolerated node
        """
        self.max_unknown = max_unknown
        self.verbose = verbose
        self.count = 0
    
    def begin(self) -> None:
        self.count = 0
    
    def handle(self, node: Any, visitor: Any) -> Any:
        self.count += 1
        if self.count > self.max_unknown:
            raise UnknownNodeError(
                node,
                f"Too many unknown contract nodes ({self.count} > {self.max_unknown}): {node!r}"
            )
        if self.verbose:
            logger.warning("Unknown contract node %d/%d: %r",
                           self.count, self.max_unknown, node)
        return visitor.unknown_result(node)
