"""
Core data models shared across the engine.
"""
