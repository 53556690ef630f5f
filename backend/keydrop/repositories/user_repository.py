"""User Repository - registered users and their public keys.

Invariants:
    - read() raises ResourceNotFoundError instead of returning None
    - Usernames are unique: create/update pass unique_on=("username",) so the
      check runs under the store lock (ConflictError on clash)
    - read_by_username returns the first match or None
"""

import logging

from keydrop.core.domain_types import EntityId, Username
from keydrop.core.entities import User, UserEntity, UserUpdate
from keydrop.core.errors import ErrorContext, ResourceNotFoundError
from keydrop.core.repository_protocols import EntityStore

logger = logging.getLogger(__name__)

_UNIQUE_FIELDS = ("username",)


class UserRepository:
    def __init__(self, store: EntityStore[UserEntity]):
        self._store = store

    async def create(self, user: User) -> UserEntity:
        entity = await self._store.create(user, unique_on=_UNIQUE_FIELDS)
        logger.info(
            f"Registered user {entity.username}",
            extra={"collection": "users", "entity_id": entity.id},
        )
        return entity

    async def read(self, user_id: EntityId) -> UserEntity:
        user = await self._store.read(user_id)
        if user is None:
            raise ResourceNotFoundError(
                "User not found",
                ErrorContext(collection="users", entity_id=user_id),
            )
        return user

    async def list(self) -> list[UserEntity]:
        return await self._store.read_all()

    async def read_by_username(self, username: Username) -> UserEntity | None:
        users = await self._store.read_by_field("username", username)
        return users[0] if users else None

    async def update(self, user_id: EntityId, changes: UserUpdate) -> UserEntity:
        return await self._store.update(user_id, changes, unique_on=_UNIQUE_FIELDS)

    async def delete(self, user_id: EntityId) -> None:
        await self._store.delete(user_id)
