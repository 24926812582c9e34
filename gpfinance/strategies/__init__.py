"""
Search operator strategies.

Initialization, selection, crossover and mutation contracts plus their
implementations, and the registry that builds them by name.
"""
