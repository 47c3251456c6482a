"""
Test suite for the collecting and aggregating traversals.
Covers order-preserving composition, the documented examples and the
concrete collectors built on CollectingVisitor.
"""

import sys
from collections import Counter
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from fincontractlib import (
    And,
    CollectingVisitor,
    CollectUnknownPolicy,
    ContractNode,
    CurrencyCollector,
    DepthMeasurer,
    Give,
    If,
    KindCounter,
    NodeCounter,
    NodeKind,
    ObservableCollector,
    One,
    Or,
    Scale,
    ScaleObs,
    Timebound,
    TraversalConfig,
    TraversalStrategy,
    Zero,
)
from fincontractlib.testing import sample_contracts


class Mystery(ContractNode):
    kind = "mystery"


class ObservableFirstCollector(CurrencyCollector):
    """Emits an If node's observable ahead of its branches' currencies."""

    def process_if_node(self, node, left, right):
        return [node.observable] + left + right


@pytest.fixture(params=[TraversalStrategy.RECURSIVE, TraversalStrategy.ITERATIVE],
                ids=lambda s: s.value)
def config(request):
    return TraversalConfig(strategy=request.param)


class TestCollectingVisitor:
    """Default hooks only compose, they never invent items."""

    @pytest.mark.parametrize("tree", [
        Zero(),
        One("USD"),
        Give(Scale(2, One("EUR"))),
        Timebound(1, 2, ScaleObs("obs", Give(Zero()))),
    ])
    def test_terminal_and_unary_trees_are_empty(self, config, tree):
        assert CollectingVisitor(config).visit(tree) == []

    @pytest.mark.parametrize("name", sorted(sample_contracts()))
    def test_default_hooks_collect_nothing(self, config, name):
        assert CollectingVisitor(config).visit(sample_contracts()[name]) == []

    def test_binary_concatenates_in_order(self, config):
        tree = Or(And(One("A"), One("B")), If("x", One("C"), One("A")))
        assert CurrencyCollector(config).visit(tree) == ["A", "B", "C", "A"]

    def test_left_then_right_for_every_binary_kind(self, config):
        left = And(One("L1"), One("L2"))
        right = Give(One("R1"))
        for node in (And(left, right), Or(left, right), If("c", left, right)):
            assert CurrencyCollector(config).visit(node) == ["L1", "L2", "R1"]

    def test_idempotent(self, config):
        tree = sample_contracts()['everything']
        collector = CurrencyCollector(config)
        first = collector.visit(tree)
        second = collector.visit(tree)
        assert first == second
        assert first == CurrencyCollector(config).visit(tree)

    def test_results_are_fresh_lists(self, config):
        tree = And(One("USD"), One("EUR"))
        collector = CurrencyCollector(config)
        collector.visit(tree).append("GBP")
        assert collector.visit(tree) == ["USD", "EUR"]

    def test_unknown_nodes_contribute_nothing(self, config, caplog):
        tree = And(One("USD"), Or(Mystery(), One("EUR")))
        with caplog.at_level("WARNING"):
            assert CurrencyCollector(config).visit(tree) == ["USD", "EUR"]
        assert "Mystery" in caplog.text


class TestDocumentedExamples:

    def test_swap(self, config):
        tree = And(One("USD"), Give(Scale(2, One("EUR"))))
        assert CurrencyCollector(config).visit(tree) == ["USD", "EUR"]

    def test_zero_contributes_nothing(self, config):
        assert CurrencyCollector(config).visit(Or(Zero(), One("USD"))) == ["USD"]

    def test_if_observable_ahead_of_children(self, config):
        tree = If("obs", One("USD"), One("EUR"))
        assert ObservableFirstCollector(config).visit(tree) == ["obs", "USD", "EUR"]


class TestObservableCollector:

    def test_if_and_scale_obs(self, config):
        tree = If("rain", ScaleObs("spot", One("USD")), And(ScaleObs("fx", Zero()), One("EUR")))
        assert ObservableCollector(config).visit(tree) == ["rain", "spot", "fx"]

    def test_bounds_excluded_by_default(self, config):
        tree = Timebound("start", "end", ScaleObs("spot", One("USD")))
        assert ObservableCollector(config).visit(tree) == ["spot"]

    def test_string_bounds_included_on_request(self, config):
        tree = And(
            Timebound("start", "end", ScaleObs("spot", One("USD"))),
            Timebound(100, "expiry", Zero()),
        )
        collector = ObservableCollector(config, include_bounds=True)
        assert collector.visit(tree) == ["start", "end", "spot", "expiry"]

    def test_duplicates_kept(self, config):
        tree = And(ScaleObs("x", One("USD")), ScaleObs("x", One("EUR")))
        assert ObservableCollector(config).visit(tree) == ["x", "x"]


class TestAggregates:

    def test_node_counter(self, config):
        assert NodeCounter(config).visit(Zero()) == 1
        assert NodeCounter(config).visit(sample_contracts()['swap']) == 5
        assert NodeCounter(config).visit(sample_contracts()['everything']) == 11

    def test_depth_measurer(self, config):
        assert DepthMeasurer(config).visit(One("USD")) == 1
        assert DepthMeasurer(config).visit(sample_contracts()['swap']) == 4
        assert DepthMeasurer(config).visit(sample_contracts()['everything']) == 5

    def test_kind_counter(self, config):
        counts = KindCounter(config).visit(sample_contracts()['everything'])
        assert counts[NodeKind.ONE] == 3
        assert counts[NodeKind.ZERO] == 1
        assert counts[NodeKind.AND] == 1
        assert sum(counts.values()) == 11
        assert set(counts) == set(NodeKind)

    def test_unknown_nodes_are_neutral(self, config):
        policy = CollectUnknownPolicy()
        config.unknown_policy = policy
        tree = And(Give(Mystery()), One("USD"))

        assert NodeCounter(config).visit(tree) == 3
        assert DepthMeasurer(config).visit(tree) == 2
        assert KindCounter(config).visit(tree) == Counter({NodeKind.AND: 1, NodeKind.GIVE: 1, NodeKind.ONE: 1})
        assert len(policy.nodes) == 3
