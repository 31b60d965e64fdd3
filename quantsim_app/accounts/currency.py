"""
Currency conversion collaborators.

Account models convert multi-currency wallets into the account base currency
through an ExchangeRates implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..errors import CurrencyConversionError
from .models import Amount, Wallet


class ExchangeRates(ABC):
    """Converts amounts between currencies as of a given time."""

    @abstractmethod
    def convert(self, amount: Amount, to_currency: str, time: Optional[datetime]) -> Amount:
        """
        Raises:
            CurrencyConversionError: If no rate is available
        """

    def convert_wallet(self, wallet: Wallet, to_currency: str, time: Optional[datetime]) -> Amount:
        total = 0.0
        for amount in wallet.to_amounts():
            total += self.convert(amount, to_currency, time).value
        return Amount(to_currency, total)


class NoConversion(ExchangeRates):
    """Single-currency setups: same-currency amounts pass through, anything else fails."""

    def convert(self, amount: Amount, to_currency: str, time: Optional[datetime]) -> Amount:
        if amount.currency != to_currency:
            raise CurrencyConversionError(
                f"No exchange rates configured to convert {amount.currency} to {to_currency}",
                from_currency=amount.currency,
                to_currency=to_currency,
            )
        return amount


class FixedExchangeRates(ExchangeRates):
    """
    Exchange rates that do not change over time.

    Args:
        base_currency: Currency the rates are quoted against
        rates: Mapping currency -> value of one unit in base_currency
    """

    def __init__(self, base_currency: str, rates: dict[str, float]):
        self.base_currency = base_currency
        self.rates = {base_currency: 1.0, **rates}

    def _rate(self, currency: str) -> float:
        try:
            return self.rates[currency]
        except KeyError:
            raise CurrencyConversionError(
                f"No exchange rate for {currency}",
                from_currency=currency,
                to_currency=self.base_currency,
            ) from None

    def convert(self, amount: Amount, to_currency: str, time: Optional[datetime]) -> Amount:
        if amount.currency == to_currency:
            return amount
        value = amount.value * self._rate(amount.currency) / self._rate(to_currency)
        return Amount(to_currency, value)
