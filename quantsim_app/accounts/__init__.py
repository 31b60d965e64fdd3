"""Account state, currency conversion and buying power models."""

from .account_model import AccountModel, CashAccount
from .currency import ExchangeRates, FixedExchangeRates, NoConversion
from .models import Account, Amount, Position, Wallet

__all__ = [
    "Account",
    "Amount",
    "Position",
    "Wallet",
    "AccountModel",
    "CashAccount",
    "ExchangeRates",
    "FixedExchangeRates",
    "NoConversion",
]
