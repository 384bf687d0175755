"""Core types and enums."""

from enum import Enum, IntEnum
from typing import Optional, Tuple


# Distance value reported when no path exists between two parties.
UNREACHABLE: Optional[int] = None


class TrustLabel(str, Enum):
    """Per-feature trust decision written to the output channels."""
    TRUSTED = "trusted"
    UNVERIFIED = "unverified"


class Feature(IntEnum):
    """Trust tiers, from strictest to most permissive."""
    FEATURE_1 = 1  # friends only
    FEATURE_2 = 2  # friends of friends
    FEATURE_3 = 3  # up to 4th degree


TrustTuple = Tuple[TrustLabel, TrustLabel, TrustLabel]
