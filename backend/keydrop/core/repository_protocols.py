"""Boundary Protocols - contracts between repositories and the persistence shell.

Invariants:
    - Repositories NEVER import the concrete store - they depend on EntityStore
    - read() reports absence as None; update()/delete() raise ResourceNotFoundError
    - Every method is async because implementations do file IO

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from keydrop.core.entities import Entity

EntityT_co = TypeVar("EntityT_co", bound=Entity, covariant=True)


class EntityStore(Protocol[EntityT_co]):
    """Contract for a persisted collection of one entity kind."""
    async def create(
        self,
        document: BaseModel | Mapping[str, Any],
        unique_on: Iterable[str] = (),
    ) -> EntityT_co: ...
    async def read(self, entity_id: str) -> EntityT_co | None: ...
    async def read_all(
        self, criteria: Mapping[str, Any] | None = None,
    ) -> list[EntityT_co]: ...
    async def read_by_field(self, field: str, value: object) -> list[EntityT_co]: ...
    async def update(
        self,
        entity_id: str,
        changes: BaseModel | Mapping[str, Any],
        unique_on: Iterable[str] = (),
    ) -> EntityT_co: ...
    async def delete(self, entity_id: str) -> None: ...
