"""
Signal data models.

A signal is a directional opinion about one asset. Several signals for the
same asset may coexist until a resolver policy reduces them to one.
"""

from dataclasses import dataclass
from enum import Enum

from ..data.models import Asset


class SignalType(str, Enum):
    """What a signal may be used for."""
    ENTRY = "entry"
    EXIT = "exit"
    BOTH = "both"


class Rating:
    """Common rating values. Ratings are plain floats, typically in [-1, 1]."""
    BUY = 1.0
    SELL = -1.0
    NEUTRAL = 0.0


@dataclass(frozen=True)
class Signal:
    """Directional trading opinion for one asset."""
    asset: Asset
    rating: float
    type: SignalType = SignalType.BOTH

    @property
    def is_buy(self) -> bool:
        return self.rating > 0.0

    @property
    def is_sell(self) -> bool:
        return self.rating < 0.0

    @property
    def entry(self) -> bool:
        return self.type in (SignalType.ENTRY, SignalType.BOTH)

    @property
    def exit(self) -> bool:
        return self.type in (SignalType.EXIT, SignalType.BOTH)
