"""Carton — component record projection and payload reconciliation.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
