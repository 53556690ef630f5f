"""Entities - domain payloads plus store-assigned identity and timestamps.

Invariants:
    - Entity.id is non-empty and never changes after creation
    - created_at is set once; updated_at is None until the first update
    - Python attribute names are snake_case; JSON wire names are camelCase
      (createdAt, publicKey, encryptedKey) and `from_` is serialized as `from`
    - to_document() omits updatedAt while it is unset

Design Decisions:
    - pydantic models over TypedDict: validation on load catches corrupted files
    - Typed partial updates (UserUpdate, MessageUpdate): field names checked by
      pydantic, merged with exclude_unset so omitted fields are never erased
    - populate_by_name: payloads accepted under either attribute or wire name
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


METADATA_FIELDS = frozenset({"id", "created_at", "updated_at"})


class DomainModel(BaseModel):
    """Shared config: camelCase aliases, lookup by either name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Entity(DomainModel):
    """Store metadata shared by every persisted record."""
    id: str = Field(min_length=1)
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def resolve_field(cls, name: str) -> str | None:
        """Map an attribute or wire name to the attribute name, None if unknown."""
        if name in cls.model_fields:
            return name
        for attr, info in cls.model_fields.items():
            if info.alias == name:
                return attr
        return None

    @classmethod
    def domain_fields(cls) -> frozenset[str]:
        return frozenset(cls.model_fields) - METADATA_FIELDS

    def to_document(self) -> dict:
        """JSON-ready dict in wire format, as persisted on disk."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ─── User ────────────────────────────────────────────────────────

class User(DomainModel):
    """Registered user. public_key is opaque to the store."""
    username: str = Field(min_length=1)
    public_key: str = Field(min_length=1)


class UserEntity(Entity, User):
    pass


class UserUpdate(DomainModel):
    username: str | None = Field(None, min_length=1)
    public_key: str | None = Field(None, min_length=1)


# ─── Message ─────────────────────────────────────────────────────

class Message(DomainModel):
    """Message encrypted for a recipient. Ciphertext fields are opaque."""
    to: str = Field(min_length=1)
    from_: str = Field(alias="from", min_length=1)
    encrypted: str
    encrypted_key: str


class MessageEntity(Entity, Message):
    pass


class MessageUpdate(DomainModel):
    to: str | None = Field(None, min_length=1)
    from_: str | None = Field(None, alias="from", min_length=1)
    encrypted: str | None = None
    encrypted_key: str | None = None
