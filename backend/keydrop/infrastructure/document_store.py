"""Document Store - generic JSON-file-backed collection keyed by store-assigned identity.

Invariants:
    - Every entity in the mapping has a non-empty id equal to its mapping key
    - The file, when present, is a JSON object mirroring the mapping at the last successful save
    - Every mutate-then-persist sequence runs under one asyncio.Lock (single writer per collection)
    - Mutations are staged on a copy and published only after the save succeeds:
      readers never observe a change that did not reach disk
    - The store raises only ResourceNotFoundError, ConflictError and InternalError
    - All IO/parse failures surface as InternalError; the store never retries
    - CRUD on a store that is not open raises InternalError

Design Decisions:
    - Whole-file rewrite via temp file + os.replace: readers never see a torn file
    - Blocking file IO in asyncio.to_thread: the event loop keeps serving reads during saves
    - Reads take no lock: single event loop, dict lookups never suspend
    - id_factory injectable: collision handling is testable without patching uuid
"""

import asyncio
import json
import logging
import os
import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from keydrop.core.entities import Entity, METADATA_FIELDS
from keydrop.core.errors import (
    ConflictError, ErrorContext, InternalError, ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStore(Generic[EntityT]):
    """CRUD + field queries over one collection persisted as `<data_dir>/<collection>.json`."""

    def __init__(
        self,
        collection: str,
        data_dir: Path | str,
        entity_type: type[EntityT],
        id_factory: Callable[[], str] | None = None,
    ):
        self.collection = collection
        self.entity_type = entity_type
        self.file_path = Path(data_dir) / f"{collection}.json"
        self._id_factory = id_factory or _new_id
        self._entities: dict[str, EntityT] = {}
        self._lock = asyncio.Lock()
        self._open = False

    # ─── Lifecycle ──────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> None:
        """Load from disk and mark the store ready. Raises InternalError on failure."""
        await self.load()
        self._open = True
        logger.info(
            f"Document store '{self.collection}' open with {len(self._entities)} documents",
            extra={"collection": self.collection},
        )

    async def close(self) -> None:
        """Mark the store closed. State on disk is whatever was last saved."""
        self._open = False
        logger.info(
            f"Document store '{self.collection}' closed",
            extra={"collection": self.collection},
        )

    async def load(self) -> None:
        """Replace in-memory state with the file contents, initializing the file if absent."""
        try:
            raw = await asyncio.to_thread(self.file_path.read_text, encoding="utf-8")
        except FileNotFoundError:
            logger.info(
                f"File {self.file_path} not found, starting with an empty store",
                extra={"collection": self.collection},
            )
            await self._initialize_empty()
            return
        except OSError as e:
            logger.error(
                f"Failed to read {self.file_path}: {e}",
                extra={"collection": self.collection}, exc_info=True,
            )
            raise InternalError(
                "Failed to load the document store", self._context(),
            ) from e

        try:
            entities = self._parse(raw)
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            logger.error(
                f"Corrupted document store {self.file_path}: {e}",
                extra={"collection": self.collection},
            )
            raise InternalError(
                "Failed to load the document store", self._context(),
            ) from e
        self._entities = entities

    async def save(self) -> None:
        """Rewrite the backing file from the in-memory mapping."""
        async with self._lock:
            await self._persist(self._entities)

    # ─── CRUD ───────────────────────────────────────────────────

    async def create(
        self,
        document: BaseModel | Mapping[str, Any],
        unique_on: Iterable[str] = (),
    ) -> EntityT:
        """Insert a new entity with a fresh id and createdAt; durable before returning.

        Any id/createdAt/updatedAt carried by `document` is ignored.
        `unique_on` names fields whose value must not already exist in the collection.
        """
        self._require_open()
        fields = self._fields_of(document)
        async with self._lock:
            self._check_unique(fields, unique_on)
            entity_id = self._id_factory()
            if entity_id in self._entities:
                raise ConflictError(
                    f"Document with ID {entity_id} already exists.",
                    self._context(entity_id),
                )
            entity = self._validate(
                {**fields, "id": entity_id, "created_at": _now()},
            )
            await self._commit({**self._entities, entity_id: entity})
        logger.debug(
            f"Created document {entity_id} in '{self.collection}'",
            extra={"collection": self.collection, "entity_id": entity_id},
        )
        return entity

    async def read(self, entity_id: str) -> EntityT | None:
        """Entity for `entity_id`, or None. Absence is not an error."""
        self._require_open()
        return self._entities.get(entity_id)

    async def read_all(
        self, criteria: Mapping[str, Any] | None = None,
    ) -> list[EntityT]:
        """All entities, or those equal on every criteria field (domain or metadata)."""
        self._require_open()
        entities = list(self._entities.values())
        if not criteria:
            return entities

        resolved: list[tuple[str, Any]] = []
        for name, value in criteria.items():
            attr = self.entity_type.resolve_field(name)
            if attr is None:
                return []
            resolved.append((attr, value))
        return [
            entity for entity in entities
            if all(getattr(entity, attr) == value for attr, value in resolved)
        ]

    async def read_by_field(self, field: str, value: object) -> list[EntityT]:
        """Entities whose domain field equals `value`. Full scan, no index."""
        self._require_open()
        attr = self.entity_type.resolve_field(field)
        if attr is None or attr not in self.entity_type.domain_fields():
            return []
        return [
            entity for entity in self._entities.values()
            if getattr(entity, attr) == value
        ]

    async def update(
        self,
        entity_id: str,
        changes: BaseModel | Mapping[str, Any],
        unique_on: Iterable[str] = (),
    ) -> EntityT:
        """Shallow-merge supplied fields onto the entity and refresh updatedAt."""
        self._require_open()
        fields = self._fields_of(changes)
        async with self._lock:
            current = self._entities.get(entity_id)
            if current is None:
                raise ResourceNotFoundError(
                    "Document with this ID does not exist",
                    self._context(entity_id),
                )
            self._check_unique(fields, unique_on, exclude_id=entity_id)
            merged = self._validate(
                {**current.model_dump(), **fields, "updated_at": _now()},
            )
            await self._commit({**self._entities, entity_id: merged})
        return merged

    async def delete(self, entity_id: str) -> None:
        """Remove the entity and persist."""
        self._require_open()
        async with self._lock:
            if entity_id not in self._entities:
                raise ResourceNotFoundError(
                    "Document with this ID does not exist",
                    self._context(entity_id),
                )
            staged = dict(self._entities)
            del staged[entity_id]
            await self._commit(staged)

    # ─── Internals ──────────────────────────────────────────────

    def _require_open(self) -> None:
        if not self._open:
            raise InternalError(
                f"Document store '{self.collection}' is not open", self._context(),
            )

    def _context(self, entity_id: str | None = None) -> ErrorContext:
        return ErrorContext(collection=self.collection, entity_id=entity_id)

    def _fields_of(self, document: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
        """Domain fields supplied by `document`, keyed by attribute name."""
        if isinstance(document, BaseModel):
            raw = document.model_dump(exclude_unset=True, exclude_none=True)
        else:
            raw = dict(document)
        fields: dict[str, Any] = {}
        for name, value in raw.items():
            attr = self.entity_type.resolve_field(name)
            if attr is None or attr in METADATA_FIELDS:
                continue
            fields[attr] = value
        return fields

    def _check_unique(
        self,
        fields: Mapping[str, Any],
        unique_on: Iterable[str],
        exclude_id: str | None = None,
    ) -> None:
        for name in unique_on:
            attr = self.entity_type.resolve_field(name)
            if attr is None or attr not in fields:
                continue
            value = fields[attr]
            for entity in self._entities.values():
                if entity.id != exclude_id and getattr(entity, attr) == value:
                    raise ConflictError(
                        f"Document with {name} '{value}' already exists.",
                        self._context(entity.id),
                    )

    def _validate(self, data: Mapping[str, Any]) -> EntityT:
        try:
            return self.entity_type.model_validate(data)
        except ValidationError as e:
            logger.error(
                f"Rejected invalid {self.collection} document: {e}",
                extra={"collection": self.collection, "entity_id": data.get("id")},
            )
            raise InternalError(
                f"Invalid {self.collection} document: {e.error_count()} validation error(s)",
                self._context(data.get("id")),
            ) from e

    def _parse(self, raw: str) -> dict[str, EntityT]:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value is not an object")
        entities: dict[str, EntityT] = {}
        for key, document in data.items():
            entity = self.entity_type.model_validate(document)
            if entity.id != key:
                raise ValueError(f"key '{key}' does not match document id '{entity.id}'")
            entities[key] = entity
        return entities

    async def _initialize_empty(self) -> None:
        self._entities = {}
        try:
            await asyncio.to_thread(self._write, {})
        except OSError as e:
            logger.error(
                f"Failed to initialize {self.file_path}: {e}",
                extra={"collection": self.collection}, exc_info=True,
            )
            raise InternalError(
                "Failed to initialize the document store", self._context(),
            ) from e
        logger.info(
            f"Initialized empty document store at {self.file_path}",
            extra={"collection": self.collection},
        )

    async def _commit(self, staged: dict[str, EntityT]) -> None:
        """Persist `staged`, then publish it. Caller holds self._lock."""
        await self._persist(staged)
        self._entities = staged

    async def _persist(self, entities: Mapping[str, EntityT]) -> None:
        documents = {
            entity_id: entity.to_document()
            for entity_id, entity in entities.items()
        }
        try:
            await asyncio.to_thread(self._write, documents)
        except (OSError, TypeError, ValueError) as e:
            logger.error(
                f"Failed to save {self.file_path}: {e}",
                extra={"collection": self.collection}, exc_info=True,
            )
            raise InternalError(
                "Failed to save the document store", self._context(),
            ) from e

    def _write(self, documents: dict[str, dict]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.file_path.with_name(self.file_path.name + ".tmp")
        tmp_path.write_text(
            json.dumps(documents, indent=2, ensure_ascii=False), encoding="utf-8",
        )
        os.replace(tmp_path, self.file_path)
