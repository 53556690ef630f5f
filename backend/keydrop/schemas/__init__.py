"""Pydantic Schemas - request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input) using the camelCase wire names
    - Each request schema converts to a core domain model via to_domain()

Design Decisions:
    - Separate from core entities: schemas are API contracts, entities are persistence (ADR: DDD boundary)
"""
