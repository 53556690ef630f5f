"""Repositories - typed facades over one EntityStore per entity kind.

Invariants:
    - Each repository owns exactly one injected store (never constructs its own)
    - Store errors propagate unchanged, except UserRepository.read (absence → 404)
"""
