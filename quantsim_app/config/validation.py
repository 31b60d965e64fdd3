"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any

from ..data.models import PRICE_TYPES

PRICING_MODELS = ("spread", "nocost")
RESOLVER_POLICIES = ("sum", "average", "first", "last", "none")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_pricing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pricing parameters."""
        errors = []

        if "model" in params and params["model"] not in PRICING_MODELS:
            errors.append(ValidationError(
                field="model",
                message=f"Must be one of {', '.join(PRICING_MODELS)}",
                value=params["model"]
            ))

        if "spread_bips" in params:
            value = params["spread_bips"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="spread_bips",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "price_type" in params and params["price_type"] not in PRICE_TYPES:
            errors.append(ValidationError(
                field="price_type",
                message=f"Must be one of {', '.join(sorted(PRICE_TYPES))}",
                value=params["price_type"]
            ))

        return errors

    @staticmethod
    def validate_account_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate account parameters."""
        errors = []

        if "minimum" in params:
            value = params["minimum"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="minimum",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "initial_cash" in params and not _is_number(params["initial_cash"]):
            errors.append(ValidationError(
                field="initial_cash",
                message="Must be a number",
                value=params["initial_cash"]
            ))

        if "base_currency" in params:
            value = params["base_currency"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="base_currency",
                    message="Must be a non-empty currency code",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_strategy_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate strategy runtime parameters."""
        errors = []

        if "initial_capacity" in params:
            value = params["initial_capacity"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="initial_capacity",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_resolver_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate signal resolver parameters."""
        errors = []

        if "policy" in params and params["policy"] not in RESOLVER_POLICIES:
            errors.append(ValidationError(
                field="policy",
                message=f"Must be one of {', '.join(RESOLVER_POLICIES)}",
                value=params["policy"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "pricing" in config:
            errors.extend(ConfigValidator.validate_pricing_params(config["pricing"]))

        if "account" in config:
            errors.extend(ConfigValidator.validate_account_params(config["account"]))

        if "strategy" in config:
            errors.extend(ConfigValidator.validate_strategy_params(config["strategy"]))

        if "resolver" in config:
            errors.extend(ConfigValidator.validate_resolver_params(config["resolver"]))

        return errors
