"""Default configuration parameters for the simulation core."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PricingParams:
    """Execution pricing parameters."""
    model: str = "spread"                           # "spread" or "nocost"
    spread_bips: float = 10.0                       # Full spread, basis points
    price_type: str = "DEFAULT"                     # Reference price of the bar


@dataclass(frozen=True)
class AccountParams:
    """Account model parameters."""
    base_currency: str = "USD"
    initial_cash: float = 1_000_000.0
    minimum: float = 0.0                            # Cash reserve in base currency


@dataclass(frozen=True)
class StrategyParams:
    """Strategy runtime parameters."""
    initial_capacity: int = 1                       # Starting window length


@dataclass(frozen=True)
class ResolverParams:
    """Signal resolution parameters."""
    policy: str = "last"                            # sum, average, first, last, none


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    pricing: PricingParams
    account: AccountParams
    strategy: StrategyParams
    resolver: ResolverParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        pricing=PricingParams(),
        account=AccountParams(),
        strategy=StrategyParams(),
        resolver=ResolverParams(),
    )
