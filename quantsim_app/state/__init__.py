"""
Strategy runtime state.

Per-asset price windows, their FILLING/FILLED lifecycle and the runtime that
drives decision rules over them.
"""
