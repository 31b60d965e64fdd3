"""
Account models that derive buying power from cash and positions.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from ..errors import ConfigurationError
from .currency import ExchangeRates, NoConversion
from .models import Account, Amount, Wallet

logger = structlog.get_logger(__name__)


class AccountModel(ABC):
    """Computes the buying power of an account."""

    @abstractmethod
    def update_account(self, account: Account) -> None:
        """Set ``account.buying_power`` in place."""


class CashAccount(AccountModel):
    """
    Plain cash account without leverage or margin.

    Shorting is not really supported by cash accounts. Short positions are
    still allowed, but their exposure is deducted for 100% from the buying
    power:

        buying power = cash - short exposure - minimum

    Open orders are not taken into account.

    Args:
        minimum: Cash balance to keep in reserve, in the account base currency
        rates: Exchange rates used to convert cash to the base currency
    """

    def __init__(self, minimum: float = 0.0, rates: Optional[ExchangeRates] = None):
        if not isinstance(minimum, (int, float)) or not math.isfinite(minimum) or minimum < 0:
            raise ConfigurationError(
                "Minimum must be a non-negative number",
                field="minimum",
                value=minimum,
            )
        self.minimum = minimum
        self.rates = rates or NoConversion()

    def update_account(self, account: Account) -> None:
        short_exposure = Wallet(*(
            position.exposure for position in account.positions.values() if position.short
        ))
        cash = account.cash - short_exposure

        # Conversion may fail, compute everything before mutating the account
        available = self.rates.convert_wallet(cash, account.base_currency, account.last_update)
        account.buying_power = Amount(account.base_currency, available.value - self.minimum)

        logger.debug(
            "Updated buying power",
            buying_power=account.buying_power.value,
            currency=account.base_currency,
            short_positions=sum(1 for p in account.positions.values() if p.short),
        )

    def __repr__(self) -> str:
        return f"CashAccount(minimum={self.minimum})"
