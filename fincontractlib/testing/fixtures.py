"""Test fixtures for FincontractLib consumers.

These fixtures make traversal order observable for testing purposes
without adding instrumentation to the library's own visitors.
"""

from typing import Any, Dict, List, Tuple

from ..core.collector import CollectingVisitor
from ..core.node import And, ContractNode, Give, If, One, Or, Scale, ScaleObs, Timebound, Zero


class RecordingVisitor(CollectingVisitor):
    """Collecting traversal that records every hook invocation.

    Each hook appends ``(hook_name, node)`` to ``calls`` and otherwise
    behaves like CollectingVisitor, so the result is still a correctly
    composed (empty) list.

    Example:
        recorder = RecordingVisitor()
        recorder.visit(tree)
        assert recorder.hook_names()[-1] == 'process_and_node'
        assert recorder.visit_count() == count_nodes(tree)
    """

    def __init__(self, config=None):
        super().__init__(config)
        self.calls: List[Tuple[str, Any]] = []

    def _record(self, hook: str, node: Any) -> None:
        self.calls.append((hook, node))

    def hook_names(self) -> List[str]:
        """Hook names in invocation order."""
        return [hook for hook, _ in self.calls]

    def visited_nodes(self) -> List[Any]:
        """Nodes in the order their hooks ran (children before parents)."""
        return [node for _, node in self.calls]

    def visit_count(self) -> int:
        return len(self.calls)

    def reset(self) -> None:
        self.calls.clear()

    def process_unknown_node(self, node):
        self._record('process_unknown_node', node)
        return super().process_unknown_node(node)

    def process_and_node(self, node, left, right):
        self._record('process_and_node', node)
        return super().process_and_node(node, left, right)

    def process_or_node(self, node, left, right):
        self._record('process_or_node', node)
        return super().process_or_node(node, left, right)

    def process_if_node(self, node, left, right):
        self._record('process_if_node', node)
        return super().process_if_node(node, left, right)

    def process_timebound_node(self, node, child):
        self._record('process_timebound_node', node)
        return super().process_timebound_node(node, child)

    def process_give_node(self, node, child):
        self._record('process_give_node', node)
        return super().process_give_node(node, child)

    def process_scale_obs_node(self, node, child):
        self._record('process_scale_obs_node', node)
        return super().process_scale_obs_node(node, child)

    def process_scale_node(self, node, child):
        self._record('process_scale_node', node)
        return super().process_scale_node(node, child)

    def process_one_node(self, node):
        self._record('process_one_node', node)
        return super().process_one_node(node)

    def process_zero_node(self, node):
        self._record('process_zero_node', node)
        return super().process_zero_node(node)


def sample_contracts() -> Dict[str, ContractNode]:
    """Return a set of named contracts covering all nine node kinds."""
    return {
        'zero': Zero(),
        'one_usd': One("USD"),
        'swap': And(One("USD"), Give(Scale(2, One("EUR")))),
        'choice': Or(Zero(), One("USD")),
        'conditional': If("obs", One("USD"), One("EUR")),
        'option': Timebound(
            1500000000, 1600000000,
            Or(ScaleObs("fx_usd_eur", One("EUR")), Zero())
        ),
        'everything': And(
            If("rain", Scale(10, One("GBP")), Give(One("JPY"))),
            Timebound("start", "end", Or(ScaleObs("spot", One("USD")), Zero())),
        ),
    }


def deep_contract(depth: int, currency: str = "USD") -> ContractNode:
    """Build a chain of ``depth`` nested Give nodes around a One node.

    Built bottom-up without recursion, so any depth can be constructed.
    """
    node: ContractNode = One(currency)
    for _ in range(depth):
        node = Give(node)
    return node
