"""
Market data models.

Assets, price bars and events as delivered by a data feed, plus the rolling
per-asset price window used by the strategy runtime.
"""
