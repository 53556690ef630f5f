"""Infrastructure - file-backed persistence, crypto helpers and observability.

Invariants:
    - The only layer that touches the filesystem
    - All IO failures mapped to InternalError (core/errors.py)
"""
