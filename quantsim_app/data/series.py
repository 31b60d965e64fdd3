"""Rolling per-asset price bar window with adaptive capacity."""

from collections import deque
from datetime import datetime
from typing import Optional

from .models import PriceBar


class PriceBarSeries:
    """
    Sliding window of price bars for one asset, most recent last.

    The window never holds more than ``capacity`` bars. Raising the capacity
    keeps every bar already retained, so the window keeps filling from where
    it is instead of starting over.
    """

    def __init__(self, capacity: int = 1):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._bars: deque = deque(maxlen=capacity)
        self._times: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._bars.maxlen

    @property
    def is_filled(self) -> bool:
        return len(self._bars) >= self.capacity

    def add(self, bar: PriceBar, time: datetime) -> bool:
        """
        Append a bar, evicting the oldest one when the window is full.

        Returns:
            True if the window is filled after the append
        """
        self._bars.append(bar)
        self._times.append(time)
        return self.is_filled

    def increase_capacity(self, new_capacity: int) -> None:
        """Grow the window to ``new_capacity``; shrinking is ignored."""
        if new_capacity <= self.capacity:
            return
        self._bars = deque(self._bars, maxlen=new_capacity)
        self._times = deque(self._times, maxlen=new_capacity)

    def clear(self) -> None:
        self._bars.clear()
        self._times.clear()

    def snapshot(self) -> tuple[list[PriceBar], list[datetime], int]:
        """Copy of the window contents and capacity, for restore()."""
        return list(self._bars), list(self._times), self.capacity

    def restore(self, snapshot: tuple[list[PriceBar], list[datetime], int]) -> None:
        bars, times, capacity = snapshot
        self._bars = deque(bars, maxlen=capacity)
        self._times = deque(times, maxlen=capacity)

    def __len__(self) -> int:
        return len(self._bars)

    def __getitem__(self, index: int) -> PriceBar:
        return self._bars[index]

    def __iter__(self):
        return iter(self._bars)

    @property
    def last(self) -> Optional[PriceBar]:
        return self._bars[-1] if self._bars else None

    @property
    def times(self) -> list[datetime]:
        return list(self._times)

    @property
    def open(self) -> list[float]:
        return [bar.open for bar in self._bars]

    @property
    def high(self) -> list[float]:
        return [bar.high for bar in self._bars]

    @property
    def low(self) -> list[float]:
        return [bar.low for bar in self._bars]

    @property
    def close(self) -> list[float]:
        return [bar.close for bar in self._bars]

    @property
    def volume(self) -> list[float]:
        return [bar.volume for bar in self._bars]

    def __repr__(self) -> str:
        return f"PriceBarSeries(size={len(self)}, capacity={self.capacity})"
