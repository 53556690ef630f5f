"""Keydrop - end-to-end encrypted message drop backed by JSON document stores.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
