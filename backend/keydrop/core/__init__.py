"""Core Layer - entities, errors and contracts, no IO.

Invariants:
    - No module in core/ imports from infrastructure/, repositories/ or api/
    - Entity models are plain pydantic models; persistence lives in the shell

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
