"""Message Repository - encrypted messages addressed to a recipient.

Invariants:
    - Absence is a normal outcome: read() returns None, read_by_field() may return []
    - Ciphertext fields are opaque; the repository never inspects them
"""

from typing import Any

from keydrop.core.domain_types import EntityId, Username
from keydrop.core.entities import Message, MessageEntity, MessageUpdate
from keydrop.core.repository_protocols import EntityStore


class MessageRepository:
    def __init__(self, store: EntityStore[MessageEntity]):
        self._store = store

    async def create(self, message: Message) -> MessageEntity:
        return await self._store.create(message)

    async def read(self, message_id: EntityId) -> MessageEntity | None:
        return await self._store.read(message_id)

    async def read_all(self) -> list[MessageEntity]:
        return await self._store.read_all()

    async def read_by_field(self, field: str, value: Any) -> list[MessageEntity]:
        return await self._store.read_by_field(field, value)

    async def read_for_recipient(self, username: Username) -> list[MessageEntity]:
        """Messages addressed to `username`, oldest first."""
        messages = await self._store.read_by_field("to", username)
        return sorted(messages, key=lambda m: m.created_at)

    async def update(
        self, message_id: EntityId, changes: MessageUpdate,
    ) -> MessageEntity:
        return await self._store.update(message_id, changes)

    async def delete(self, message_id: EntityId) -> None:
        await self._store.delete(message_id)
