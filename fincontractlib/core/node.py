"""Contract node model for FincontractLib.

Nodes are intentionally kept simple - they are immutable data containers.
All semantics (what a contract is worth, how it is displayed, which
currencies it touches) live in traversals, so new analyses never require
changes here.

Every non-terminal node stores its children the same way: a tuple whose
length is the arity of the node's kind. Positions carry meaning. For
``Or``, index 0 is the first choice and index 1 the second; for ``If``,
index 0 is the branch taken when the observable is true.
"""

import numbers
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Hashable, List, Tuple, Union

from ..errors import MalformedContractError


class NodeKind(Enum):
    """The closed set of contract combinators."""
    AND = "and"
    OR = "or"
    IF = "if"
    TIMEBOUND = "timebound"
    GIVE = "give"
    SCALE_OBS = "scale_obs"
    SCALE = "scale"
    ONE = "one"
    ZERO = "zero"

    @property
    def arity(self) -> int:
        """Number of children a node of this kind holds."""
        return _ARITY[self]

    @property
    def is_binary(self) -> bool:
        return self.arity == 2

    @property
    def is_unary(self) -> bool:
        return self.arity == 1

    @property
    def is_terminal(self) -> bool:
        return self.arity == 0


_ARITY = {
    NodeKind.AND: 2,
    NodeKind.OR: 2,
    NodeKind.IF: 2,
    NodeKind.TIMEBOUND: 1,
    NodeKind.GIVE: 1,
    NodeKind.SCALE_OBS: 1,
    NodeKind.SCALE: 1,
    NodeKind.ONE: 0,
    NodeKind.ZERO: 0,
}

# Positional choice convention shared with executors
OR_FIRST = 0
OR_SECOND = 1


def _require_name(node_type: str, field: str, value: Any) -> None:
    if not isinstance(value, str) or not value:
        raise MalformedContractError(
            f"{node_type}.{field} must be a non-empty string, got {value!r}"
        )


class ContractNode:
    """Base class for every node of a contract tree.

    Subclasses set the class attribute ``kind``. When ``kind`` is one of
    the nine NodeKind members the number of children is checked against
    its arity; any other ``kind`` makes the subclass an extension node,
    which the dispatcher hands to its unknown-node fallback without
    looking at its children.

    Nodes cannot be modified after construction, and since a node can
    only reference nodes that already exist, trees are always finite
    and acyclic.
    """

    kind: Any = None
    _fields: Tuple[str, ...] = ()

    __slots__ = ('_children', '_hash')

    def __init__(self, *children: 'ContractNode'):
        if type(self).kind is None:
            raise TypeError(f"{type(self).__name__} does not declare a node kind")

        if isinstance(self.kind, NodeKind) and len(children) != self.kind.arity:
            raise MalformedContractError(
                f"{type(self).__name__} takes {self.kind.arity} "
                f"child(ren), got {len(children)}"
            )
        for child in children:
            if not isinstance(child, ContractNode):
                raise MalformedContractError(
                    f"{type(self).__name__} child must be a ContractNode, got {child!r}"
                )

        object.__setattr__(self, '_children', tuple(children))
        try:
            key = hash((type(self).__name__, self._field_key(), self._children))
        except TypeError as e:
            raise MalformedContractError(
                f"{type(self).__name__} attributes must be hashable"
            ) from e
        object.__setattr__(self, '_hash', key)

    @property
    def children(self) -> Tuple['ContractNode', ...]:
        """Children in their fixed positional order."""
        return self._children

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return not self._children

    def metadata(self) -> Dict[str, Any]:
        """Return the node's own attributes (not its children)."""
        return {name: getattr(self, name) for name in self._fields}

    def _field_values(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self._fields)

    def _field_key(self) -> Tuple[Any, ...]:
        # Typed, so Scale(2, c) and Scale(2.0, c) are different nodes
        return tuple((type(v).__name__, v) for v in self._field_values())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} nodes are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} nodes are immutable")

    def __eq__(self, other: object) -> bool:
        """Nodes are equal if they have the same type, attributes and children."""
        if not isinstance(other, ContractNode):
            return NotImplemented
        # Walked with a work list so deep trees compare without recursion
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if (type(a) is not type(b)
                    or a._hash != b._hash
                    or a._field_key() != b._field_key()
                    or len(a._children) != len(b._children)):
                return False
            pending.extend(zip(a._children, b._children))
        return True

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        stack = [(self, False)]
        parts: List[str] = []
        while stack:
            node, expanded = stack.pop()
            if not expanded:
                stack.append((node, True))
                stack.extend((c, False) for c in reversed(node._children))
                continue
            args = [repr(v) for v in node._field_values()]
            if node._children:
                args.extend(parts[-len(node._children):])
                del parts[-len(node._children):]
            parts.append(f"{type(node).__name__}({', '.join(args)})")
        return parts[0]


class One(ContractNode):
    """Pays one unit of ``currency`` to the owner."""

    kind = NodeKind.ONE
    _fields = ('currency',)
    __slots__ = ('currency',)

    def __init__(self, currency: str):
        _require_name('One', 'currency', currency)
        object.__setattr__(self, 'currency', currency)
        super().__init__()


class Zero(ContractNode):
    """A contract with no obligations."""

    kind = NodeKind.ZERO
    __slots__ = ()

    def __init__(self):
        super().__init__()


class Give(ContractNode):
    """Swaps owner and issuer of the child contract."""

    kind = NodeKind.GIVE
    __slots__ = ()

    def __init__(self, child: ContractNode):
        super().__init__(child)

    @property
    def child(self) -> ContractNode:
        return self._children[0]


class Scale(ContractNode):
    """Multiplies the child's value by a constant factor."""

    kind = NodeKind.SCALE
    _fields = ('factor',)
    __slots__ = ('factor',)

    def __init__(self, factor: Union[numbers.Real, Decimal], child: ContractNode):
        if isinstance(factor, bool) or not isinstance(factor, (numbers.Real, Decimal)):
            raise MalformedContractError(f"Scale.factor must be a real number, got {factor!r}")
        object.__setattr__(self, 'factor', factor)
        super().__init__(child)

    @property
    def child(self) -> ContractNode:
        return self._children[0]


class ScaleObs(ContractNode):
    """Multiplies the child's value by an observed quantity."""

    kind = NodeKind.SCALE_OBS
    _fields = ('observable',)
    __slots__ = ('observable',)

    def __init__(self, observable: str, child: ContractNode):
        _require_name('ScaleObs', 'observable', observable)
        object.__setattr__(self, 'observable', observable)
        super().__init__(child)

    @property
    def child(self) -> ContractNode:
        return self._children[0]


class Timebound(ContractNode):
    """Restricts the child to the window between ``lower`` and ``upper``.

    Bounds are opaque here: timestamps, or names of observables that
    resolve to one at execution time.
    """

    kind = NodeKind.TIMEBOUND
    _fields = ('lower', 'upper')
    __slots__ = ('lower', 'upper')

    def __init__(self, lower: Hashable, upper: Hashable, child: ContractNode):
        for name, value in (('lower', lower), ('upper', upper)):
            if value is None or isinstance(value, bool):
                raise MalformedContractError(f"Timebound.{name} is not a valid bound: {value!r}")
        object.__setattr__(self, 'lower', lower)
        object.__setattr__(self, 'upper', upper)
        super().__init__(child)

    @property
    def child(self) -> ContractNode:
        return self._children[0]


class And(ContractNode):
    """Both sub-contracts are held at the same time."""

    kind = NodeKind.AND
    __slots__ = ()

    def __init__(self, left: ContractNode, right: ContractNode):
        super().__init__(left, right)

    @property
    def left(self) -> ContractNode:
        return self._children[0]

    @property
    def right(self) -> ContractNode:
        return self._children[1]


class Or(ContractNode):
    """The owner keeps exactly one of the two sub-contracts."""

    kind = NodeKind.OR
    __slots__ = ()

    def __init__(self, first: ContractNode, second: ContractNode):
        super().__init__(first, second)

    @property
    def first(self) -> ContractNode:
        return self._children[OR_FIRST]

    @property
    def second(self) -> ContractNode:
        return self._children[OR_SECOND]


class If(ContractNode):
    """A boolean observable selects which sub-contract becomes active."""

    kind = NodeKind.IF
    _fields = ('observable',)
    __slots__ = ('observable',)

    def __init__(self, observable: str, if_true: ContractNode, if_false: ContractNode):
        _require_name('If', 'observable', observable)
        object.__setattr__(self, 'observable', observable)
        super().__init__(if_true, if_false)

    @property
    def if_true(self) -> ContractNode:
        return self._children[0]

    @property
    def if_false(self) -> ContractNode:
        return self._children[1]
