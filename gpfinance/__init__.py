"""
GPFinance - Genetic Programming Engine for Trading Rules

Evolves tree-structured trading rules against historical security data
using a fixed-length generational loop with pluggable initialization,
selection, crossover and mutation strategies driven by annealed rates.
"""

__version__ = "0.1.0"
__author__ = "GPFinance Team"
