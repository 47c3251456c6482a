"""Configuration system for FincontractLib.

This module defines how users specify how a traversal walks a contract
tree and what it does with nodes it does not recognise.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .policies import UnknownNodePolicy, FailFastPolicy


class TraversalStrategy(Enum):
    """How the dispatcher walks the tree.
    
    Both strategies call the hooks in exactly the same order and
    produce the same result. They only differ in how deep a tree
    they can handle.
    """
    RECURSIVE = "recursive"    # Plain recursion, limited by sys.getrecursionlimit()
    ITERATIVE = "iterative"    # Explicit work stack, no depth limit


@dataclass
class TraversalConfig:
    """Complete configuration for a contract traversal.
    
    Passed to a Visitor at construction time. A visitor without a
    config uses ``TraversalConfig()`` and its own default policy.
    """
    
    # Walking algorithm
    strategy: TraversalStrategy = TraversalStrategy.RECURSIVE
    
    # Fallback for nodes outside the nine known kinds (None = visitor default)
    unknown_policy: Optional[UnknownNodePolicy] = None
    
    # Refuse trees deeper than this (None = unlimited)
    max_depth: Optional[int] = None
    
    @classmethod
    def deep_trees(cls, max_depth: Optional[int] = None) -> 'TraversalConfig':
        """Create config for trees too deep for plain recursion.
        
        Args:
            max_depth: Optional depth guard
            
        Returns:
            TraversalConfig using the iterative strategy
        """
        return cls(strategy=TraversalStrategy.ITERATIVE, max_depth=max_depth)
    
    @classmethod
    def strict(cls) -> 'TraversalConfig':
        """Create config that fails loudly on unknown nodes."""
        return cls(unknown_policy=FailFastPolicy())
    
    def validate(self) -> List[str]:
        """Validate configuration for consistency.
        
        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        
        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")
        
        if self.unknown_policy is not None and not isinstance(self.unknown_policy, UnknownNodePolicy):
            errors.append("unknown_policy must be an UnknownNodePolicy instance")
        
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                errors.append("max_depth must be an integer")
            elif self.max_depth <= 0:
                errors.append("max_depth must be positive")
        
        return errors
