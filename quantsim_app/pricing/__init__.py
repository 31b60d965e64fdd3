"""Pricing engines that turn a price bar into an execution price."""

from .engine import NoCostPricingEngine, Pricing, PricingEngine, SpreadPricingEngine

__all__ = ["PricingEngine", "Pricing", "NoCostPricingEngine", "SpreadPricingEngine"]
