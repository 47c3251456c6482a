"""Exception hierarchy for FincontractLib.

Only two things can go wrong around a traversal: a tree that was built
with the wrong shape, and a node the dispatcher does not recognise. The
first is reported when the node is constructed, the second is routed to
an unknown-node policy (see ``policies``) which may raise
``UnknownNodeError``.
"""

from typing import Any, Optional


class FincontractError(Exception):
    """Base class for all errors raised by FincontractLib."""


class MalformedContractError(FincontractError, ValueError):
    """A node was constructed with the wrong children or attributes."""


class UnknownNodeError(FincontractError):
    """A traversal refused to handle a node outside the nine known kinds.
    
    Attributes:
        node: The offending node (or arbitrary object)
    """
    
    def __init__(self, node: Any, message: Optional[str] = None):
        self.node = node
        if message is None:
            message = f"Unknown contract node: {node!r}"
        super().__init__(message)


class ConfigurationError(FincontractError, ValueError):
    """A TraversalConfig failed validation."""
    
    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("Invalid traversal configuration: " + "; ".join(self.problems))
