"""Example: classify a few payments against a tiny payment graph."""

from trust_graph.agents.proximity import ProximityAgent
from trust_graph.common.logging import get_logger
from trust_graph.models.graph import GraphBuilder

logger = get_logger(__name__)


def example_scenario():
    """
    Example scenario: 10 has paid 20, and 20 has paid 30.

    1. Build the graph from batch records
    2. Classify a friend-of-friend payment
    3. Classify a payment to a stranger
    4. Classify a payment to self
    """
    batch = [
        "time, id1, id2, amount, message",
        "2016-11-02 09:49:29, 10, 20, 12.50, dinner",
        "2016-11-02 09:51:03, 20, 30, 4.00, coffee",
    ]
    build = GraphBuilder().build_from_lines(batch)
    agent = ProximityAgent(build.graph)

    for payer, payee in [(10, 30), (10, 99), (10, 10)]:
        result = agent.analyze(payer, payee)
        labels = ", ".join(label.value for label in result.labels())
        logger.info(f"{payer} -> {payee}: distance={result.distance} ({labels})")

    return agent


if __name__ == "__main__":
    example_scenario()
