"""Renderers for contract trees.

Both renderers are ordinary Visitors: the expression renderer turns a
tree back into combinator text, the DOT renderer produces a Graphviz
graph for inspection.
"""

from typing import Any, List, Tuple

from .core.visitor import Visitor


class ExpressionRenderer(Visitor[str]):
    """Renders a tree as combinator text.

    Example:
        >>> ExpressionRenderer().visit(And(One("USD"), Give(Scale(2, One("EUR")))))
        'And(One(USD),Give(Scale(2,One(EUR))))'
    """

    def unknown_result(self, node: Any) -> str:
        return f"<{type(node).__name__}>"

    def process_and_node(self, node, left, right):
        return f"And({left},{right})"

    def process_or_node(self, node, left, right):
        return f"Or({left},{right})"

    def process_if_node(self, node, left, right):
        return f"If({node.observable},{left},{right})"

    def process_timebound_node(self, node, child):
        return f"Timebound({node.lower},{node.upper},{child})"

    def process_give_node(self, node, child):
        return f"Give({child})"

    def process_scale_obs_node(self, node, child):
        return f"ScaleObs({node.observable},{child})"

    def process_scale_node(self, node, child):
        return f"Scale({node.factor},{child})"

    def process_one_node(self, node):
        return f"One({node.currency})"

    def process_zero_node(self, node):
        return "Zero()"


def _quote(*parts: Any) -> str:
    # Multi-part labels are joined with the DOT line break escape
    escaped = [str(p).replace("\\", "\\\\").replace('"', '\\"') for p in parts]
    return '"' + "\\n".join(escaped) + '"'


class DotRenderer(Visitor[str]):
    """Renders a tree as a Graphviz ``digraph``.

    Node ids are assigned in hook order (children before parents), so the
    output is deterministic for a given tree. Edges out of ``Or`` are
    labelled first/second and edges out of ``If`` true/false.

    Hooks return the id of the node they declared; the statements
    themselves are appended to one list shared by the whole traversal.
    """

    def __init__(self, config=None, graph_name: str = "fincontract"):
        super().__init__(config)
        self.graph_name = graph_name
        self._counter = 0
        self._statements: List[str] = []

    def render(self, root: Any) -> str:
        """Render the tree rooted at ``root`` to DOT source."""
        self._counter = 0
        self._statements = []
        self.visit(root)
        lines = [f"digraph {_quote(self.graph_name)} {{"]
        lines.extend(f"  {s}" for s in self._statements)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _leaf(self, *label: Any) -> str:
        node_id = f"n{self._counter}"
        self._counter += 1
        self._statements.append(f"{node_id} [label={_quote(*label)}];")
        return node_id

    def _join(self, label: Tuple[Any, ...], children: List[str], edge_labels=None) -> str:
        node_id = self._leaf(*label)
        for index, child_id in enumerate(children):
            if edge_labels:
                self._statements.append(
                    f"{node_id} -> {child_id} [label={_quote(edge_labels[index])}];")
            else:
                self._statements.append(f"{node_id} -> {child_id};")
        return node_id

    def unknown_result(self, node: Any) -> str:
        return self._leaf("?", type(node).__name__)

    def process_and_node(self, node, left, right):
        return self._join(("And",), [left, right])

    def process_or_node(self, node, left, right):
        return self._join(("Or",), [left, right], ("first", "second"))

    def process_if_node(self, node, left, right):
        return self._join(("If", node.observable), [left, right], ("true", "false"))

    def process_timebound_node(self, node, child):
        return self._join(("Timebound", f"[{node.lower}, {node.upper}]"), [child])

    def process_give_node(self, node, child):
        return self._join(("Give",), [child])

    def process_scale_obs_node(self, node, child):
        return self._join(("ScaleObs", node.observable), [child])

    def process_scale_node(self, node, child):
        return self._join(("Scale", node.factor), [child])

    def process_one_node(self, node):
        return self._leaf("One", node.currency)

    def process_zero_node(self, node):
        return self._leaf("Zero")
