"""Proximity Agent Output Schema.

Pydantic model for the per-transaction trust classification.
"""

from typing import Optional

from pydantic import BaseModel, Field

from trust_graph.core.types import Feature, TrustLabel, TrustTuple


class ProximityOutput(BaseModel):
    """Output from the Proximity Agent.

    One trust label per feature, all derived from the same hop distance.
    """

    distance: Optional[int] = Field(
        default=None,
        ge=0,
        description="Hops between payer and payee; None when unreachable"
    )
    feature_1: TrustLabel = Field(..., description="Friends-only policy")
    feature_2: TrustLabel = Field(..., description="Friends-of-friends policy")
    feature_3: TrustLabel = Field(..., description="Up to 4th degree policy")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "distance": 2,
                "feature_1": "unverified",
                "feature_2": "trusted",
                "feature_3": "trusted",
            }
        }
    }

    @property
    def is_reachable(self) -> bool:
        return self.distance is not None

    def labels(self) -> TrustTuple:
        """Labels in feature order."""
        return (self.feature_1, self.feature_2, self.feature_3)

    def label_for(self, feature: Feature) -> TrustLabel:
        return self.labels()[int(feature) - 1]
