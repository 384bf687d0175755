"""Proximity Agent - trust by social distance.

Classifies a payment by how far apart payer and payee sit in the payment
graph. Strangers are not accused of fraud; they are simply unverified.

This agent never mutates the graph and never raises on bad data: any
failure to resolve a distance is classified as unreachable.
"""

import logging
from typing import Dict, Optional

from trust_graph.agents.proximity.schema import ProximityOutput
from trust_graph.common.constants import ClassificationConstants
from trust_graph.core.types import Feature, TrustLabel, TrustTuple, UNREACHABLE
from trust_graph.models.graph.schema import PaymentGraph
from trust_graph.models.graph.traversal import shortest_path_length

logger = logging.getLogger(__name__)


# Widest distance each feature still trusts, strictest first
FEATURE_THRESHOLDS: Dict[Feature, int] = {
    Feature.FEATURE_1: ClassificationConstants.FEATURE_1_MAX_HOPS,
    Feature.FEATURE_2: ClassificationConstants.FEATURE_2_MAX_HOPS,
    Feature.FEATURE_3: ClassificationConstants.FEATURE_3_MAX_HOPS,
}

MAX_TRUSTED_HOPS = max(FEATURE_THRESHOLDS.values())


def classify_distance(distance: Optional[int]) -> TrustTuple:
    """Map a hop distance to one trust label per feature.

    Unreachable and negative distances are unverified everywhere.
    """
    if distance is None or distance < 0:
        return (TrustLabel.UNVERIFIED,) * len(FEATURE_THRESHOLDS)
    return tuple(
        TrustLabel.TRUSTED if distance <= FEATURE_THRESHOLDS[feature] else TrustLabel.UNVERIFIED
        for feature in Feature
    )


class ProximityAgent:
    """Proximity Agent - Trust by Association.

    Holds a read-only reference to a frozen payment graph and answers one
    classification per payment.

    Responsibilities:
    - Compute payer/payee hop distance
    - Map distance to per-feature trust labels

    Constraints:
    - Never mutates the graph
    - Never raises for malformed or unknown parties
    - No state carried between payments
    """

    def __init__(self, graph: PaymentGraph):
        """Initialize Proximity Agent.

        Args:
            graph: Payment graph; frozen before use so that concurrent
                lookups are safe
        """
        if not graph.is_frozen:
            graph.freeze()
        self._graph = graph

    @property
    def graph(self) -> PaymentGraph:
        return self._graph

    def distance(self, payer: int, payee: int) -> Optional[int]:
        """Hop distance between two parties, capped at the widest trusted tier.

        Returns:
            Hop count, or None when unreachable, beyond every threshold,
            or the lookup failed
        """
        try:
            return shortest_path_length(
                self._graph, payer, payee, max_depth=MAX_TRUSTED_HOPS
            )
        except Exception as e:
            logger.debug(f"Distance lookup failed for ({payer}, {payee}): {e}")
            return UNREACHABLE

    def analyze(self, payer: int, payee: int) -> ProximityOutput:
        """Classify a payment between two parties.

        Args:
            payer: Paying party id
            payee: Receiving party id

        Returns:
            ProximityOutput with distance and per-feature labels
        """
        distance = self.distance(payer, payee)
        return self.classify(distance)

    @staticmethod
    def classify(distance: Optional[int]) -> ProximityOutput:
        """Build the output for an already computed distance."""
        if distance is not None and distance < 0:
            distance = UNREACHABLE
        feature_1, feature_2, feature_3 = classify_distance(distance)
        return ProximityOutput(
            distance=distance,
            feature_1=feature_1,
            feature_2=feature_2,
            feature_3=feature_3,
        )
