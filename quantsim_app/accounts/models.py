"""
Account data models.

Amounts are immutable money values. Wallets, positions and accounts are
mutable and are updated in place by the accounting step of each event.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..data.models import Asset


@dataclass(frozen=True)
class Amount:
    """A value in a single currency."""
    currency: str
    value: float

    def __str__(self) -> str:
        return f"{self.value:.2f} {self.currency}"


class Wallet:
    """Cash holdings in one or more currencies."""

    def __init__(self, *amounts: Amount):
        self._balances: dict[str, float] = {}
        for amount in amounts:
            self.deposit(amount)

    def deposit(self, amount: Amount) -> None:
        self._balances[amount.currency] = self._balances.get(amount.currency, 0.0) + amount.value

    def withdraw(self, amount: Amount) -> None:
        self._balances[amount.currency] = self._balances.get(amount.currency, 0.0) - amount.value

    def get_amount(self, currency: str) -> Amount:
        return Amount(currency, self._balances.get(currency, 0.0))

    @property
    def currencies(self) -> list[str]:
        return list(self._balances)

    def to_amounts(self) -> list[Amount]:
        return [Amount(currency, value) for currency, value in self._balances.items()]

    def copy(self) -> "Wallet":
        return Wallet(*self.to_amounts())

    def __sub__(self, other: "Wallet") -> "Wallet":
        result = self.copy()
        for amount in other.to_amounts():
            result.withdraw(amount)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wallet):
            return NotImplemented
        currencies = set(self._balances) | set(other._balances)
        return all(self._balances.get(c, 0.0) == other._balances.get(c, 0.0) for c in currencies)

    def __repr__(self) -> str:
        return f"Wallet({', '.join(str(a) for a in self.to_amounts())})"


@dataclass
class Position:
    """Holding of one asset. Negative size is a short position."""
    asset: Asset
    size: float
    avg_price: float = 0.0
    mkt_price: float = 0.0
    last_update: Optional[datetime] = None

    @property
    def short(self) -> bool:
        return self.size < 0

    @property
    def closed(self) -> bool:
        return self.size == 0

    @property
    def exposure(self) -> Amount:
        """Absolute market value of the position in the asset currency."""
        value = abs(self.size) * self.mkt_price * self.asset.multiplier
        return Amount(self.asset.currency, value)

    @property
    def market_value(self) -> Amount:
        """Signed market value of the position in the asset currency."""
        value = self.size * self.mkt_price * self.asset.multiplier
        return Amount(self.asset.currency, value)


@dataclass
class Account:
    """Cash, positions and derived buying power of a trading account."""
    base_currency: str = "USD"
    cash: Wallet = field(default_factory=Wallet)
    positions: dict[Asset, Position] = field(default_factory=dict)
    last_update: Optional[datetime] = None
    buying_power: Optional[Amount] = None

    def __post_init__(self):
        if self.buying_power is None:
            self.buying_power = Amount(self.base_currency, 0.0)

    def mark_to_market(self, prices: dict[Asset, float], time: datetime) -> None:
        """Update market prices of held positions."""
        for asset, price in prices.items():
            position = self.positions.get(asset)
            if position is not None:
                position.mkt_price = price
                position.last_update = time
        self.last_update = time

    def apply_trade(self, asset: Asset, size: float, price: float, time: datetime) -> None:
        """
        Settle a filled trade: move cash and update the position.

        Positions that become flat are removed.
        """
        cost = Amount(asset.currency, size * price * asset.multiplier)
        self.cash.withdraw(cost)

        position = self.positions.get(asset)
        if position is None:
            self.positions[asset] = Position(asset, size, price, price, time)
        else:
            new_size = position.size + size
            if new_size == 0:
                del self.positions[asset]
            else:
                if (new_size > 0) != (position.size > 0):
                    position.avg_price = price
                elif abs(new_size) > abs(position.size):
                    position.avg_price = (
                        position.avg_price * position.size + price * size
                    ) / new_size
                position.size = new_size
                position.mkt_price = price
                position.last_update = time
        self.last_update = time
