"""
Core numeric value types, serialization contracts, and invariants.

This package has no I/O and no process-wide state; every value is an
immutable model.
"""
