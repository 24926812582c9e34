"""
Run configuration module.

Defaults, option parsing, YAML loading and validation of the parameters
that drive a GP run.
"""
