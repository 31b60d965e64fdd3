"""
quantsim - Simulation core for backtesting and live trading

Turns a stream of timestamped price events into trading signals, resolves
conflicting signals across strategies, and computes execution prices and the
resulting buying power of a simulated cash account.
"""

__version__ = "0.1.0"
__author__ = "quantsim Team"
