"""
Technical indicators over price windows.

Every function either computes its value from the most recent data or raises
InsufficientDataError carrying the minimum number of observations it needs.
Inputs are sequences in chronological order (oldest first).
"""

from collections.abc import Sequence

from ..errors import InsufficientDataError


def _require(values: Sequence[float], count: int, indicator: str) -> None:
    if len(values) < count:
        raise InsufficientDataError(
            f"{indicator} needs {count} values, got {len(values)}",
            required_count=count,
            available_count=len(values),
            context={"indicator": indicator},
        )


def sma(values: Sequence[float], period: int, previous: int = 0) -> float:
    """Simple moving average of the last ``period`` values."""
    _require(values, period + previous, "sma")
    end = len(values) - previous
    return sum(values[end - period:end]) / period


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential moving average, seeded with the SMA of the first period.

    Returns one value per input value from index ``period - 1`` onwards.
    """
    _require(values, period, "ema")
    alpha = 2.0 / (period + 1)
    result = [sum(values[:period]) / period]
    for value in values[period:]:
        result.append(alpha * value + (1.0 - alpha) * result[-1])
    return result


def ema(values: Sequence[float], period: int, previous: int = 0) -> float:
    _require(values, period + previous, "ema")
    return ema_series(values, period)[-1 - previous]


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    previous: int = 0,
) -> tuple[float, float, float]:
    """
    Moving Average Convergence Divergence.

    Returns:
        Tuple of (macd, signal, histogram) for the bar ``previous`` steps back
    """
    required = slow_period + signal_period - 1 + previous
    _require(values, required, "macd")

    fast = ema_series(values, fast_period)
    slow = ema_series(values, slow_period)
    offset = slow_period - fast_period
    macd_line = [f - s for f, s in zip(fast[offset:], slow)]
    signal_line = ema_series(macd_line, signal_period)

    macd_value = macd_line[-1 - previous]
    signal_value = signal_line[-1 - previous]
    return macd_value, signal_value, macd_value - signal_value


def true_range(high: float, low: float, previous_close: float) -> float:
    """
    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))
    """
    return max(high - low, abs(high - previous_close), abs(low - previous_close))


def atr(
    high: Sequence[float],
    low: Sequence[float],
    close: Sequence[float],
    period: int = 14,
) -> float:
    """
    Average True Range as the simple average of the last ``period`` true ranges.

    Needs ``period + 1`` bars so every true range has a previous close.
    """
    _require(close, period + 1, "atr")
    ranges = [
        true_range(high[i], low[i], close[i - 1])
        for i in range(len(close) - period, len(close))
    ]
    return sum(ranges) / period


def natr(
    high: Sequence[float],
    low: Sequence[float],
    close: Sequence[float],
    period: int = 14,
) -> float:
    """
    Normalized ATR: 100 * ATR / last close, 0.0 for a non-positive close.
    """
    value = atr(high, low, close, period)
    if close[-1] <= 0:
        return 0.0
    return 100.0 * value / close[-1]


def record_high(values: Sequence[float], period: int, previous: int = 0) -> bool:
    """True if the value ``previous`` steps back is the highest of the last ``period`` values."""
    _require(values, period + previous, "record_high")
    end = len(values) - previous
    return values[end - 1] >= max(values[end - period:end])


def record_low(values: Sequence[float], period: int, previous: int = 0) -> bool:
    """True if the value ``previous`` steps back is the lowest of the last ``period`` values."""
    _require(values, period + previous, "record_low")
    end = len(values) - previous
    return values[end - 1] <= min(values[end - period:end])
