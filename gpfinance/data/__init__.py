"""
Security data module.

Immutable price and indicator series consumed read-only during fitness
measurement.
"""
