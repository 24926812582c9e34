"""
Reference trading-rule representation.

Decision trees over fundamental or technical indicators, the operators
that reshape them, and the backtest used as their fitness.
"""
