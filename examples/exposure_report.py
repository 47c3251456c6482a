#!/usr/bin/env python3
"""
Currency exposure example showing how to write a custom traversal.

This example demonstrates:
- Building a contract tree from combinators
- Overriding a handful of CollectingVisitor hooks
- Using the functional API for rendering and statistics
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from fincontractlib import (
    And, CollectingVisitor, Give, If, One, Or, Scale, ScaleObs, Timebound, Zero,
    get_tree_stats, render_dot, render_expression,
)


class ExposureCollector(CollectingVisitor):
    """Collects (currency, direction) pairs.

    Give flips the direction of everything below it, so a currency paid
    under an odd number of Give nodes is owed rather than received.
    """

    def process_one_node(self, node):
        return [(node.currency, +1)]

    def process_give_node(self, node, child):
        return [(currency, -direction) for currency, direction in child]


def main():
    logging.basicConfig(level=logging.INFO)

    contract = And(
        One("USD"),
        Give(Or(
            Scale(100, One("EUR")),
            Timebound(1500000000, 1600000000,
                      If("rain", ScaleObs("fx_gbp", One("GBP")), Zero())),
        )),
    )

    print(f"Contract: {render_expression(contract)}")
    print("-" * 50)

    for currency, direction in ExposureCollector().visit(contract):
        print(f"  {currency}: {'receive' if direction > 0 else 'pay'}")

    stats = get_tree_stats(contract)
    print("-" * 50)
    print(f"Nodes: {stats['total_nodes']}, depth: {stats['depth']}")
    print(f"Observables: {', '.join(stats['observables'])}")

    if len(sys.argv) > 1:
        Path(sys.argv[1]).write_text(render_dot(contract))
        print(f"Written DOT file to: {sys.argv[1]}")


if __name__ == "__main__":
    main()
