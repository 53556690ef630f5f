"""Entities - verifies wire names, field resolution and partial updates.

Tests:
    - camelCase aliases and `from` keyword field
    - resolve_field accepts attribute or wire names
    - domain_fields excludes store metadata
    - to_document omits updatedAt until set
"""

from datetime import datetime, timezone

from keydrop.core.entities import (
    Message, MessageEntity, MessageUpdate, User, UserEntity, UserUpdate,
)


def _message_entity(**overrides) -> MessageEntity:
    data = {
        "id": "m-1",
        "createdAt": "2026-01-01T00:00:00Z",
        "to": "bob",
        "from": "alice",
        "encrypted": "X",
        "encryptedKey": "Y",
    }
    data.update(overrides)
    return MessageEntity.model_validate(data)


def test_message_accepts_wire_and_attribute_names():
    wire = Message.model_validate(
        {"to": "bob", "from": "alice", "encrypted": "X", "encryptedKey": "Y"},
    )
    attrs = Message(to="bob", from_="alice", encrypted="X", encrypted_key="Y")
    assert wire == attrs


def test_resolve_field_by_alias_and_name():
    assert MessageEntity.resolve_field("from") == "from_"
    assert MessageEntity.resolve_field("from_") == "from_"
    assert MessageEntity.resolve_field("encryptedKey") == "encrypted_key"
    assert MessageEntity.resolve_field("createdAt") == "created_at"
    assert UserEntity.resolve_field("publicKey") == "public_key"


def test_resolve_unknown_field_is_none():
    assert UserEntity.resolve_field("password") is None


def test_domain_fields_exclude_metadata():
    assert UserEntity.domain_fields() == {"username", "public_key"}
    assert MessageEntity.domain_fields() == {
        "to", "from_", "encrypted", "encrypted_key",
    }


def test_to_document_uses_wire_names_and_omits_unset_updated_at():
    doc = _message_entity().to_document()
    assert doc["from"] == "alice"
    assert doc["encryptedKey"] == "Y"
    assert doc["createdAt"].startswith("2026-01-01T00:00:00")
    assert "updatedAt" not in doc


def test_to_document_includes_updated_at_once_set():
    entity = _message_entity(updatedAt="2026-01-02T00:00:00Z")
    assert entity.updated_at == datetime(2026, 1, 2, tzinfo=timezone.utc)
    assert "updatedAt" in entity.to_document()


def test_partial_update_tracks_only_supplied_fields():
    changes = UserUpdate(public_key="new-key")
    assert changes.model_dump(exclude_unset=True) == {"public_key": "new-key"}
    assert MessageUpdate.model_validate({"from": "carol"}).from_ == "carol"


def test_user_entity_combines_payload_and_metadata():
    user = UserEntity(
        id="u-1", created_at=datetime.now(timezone.utc),
        username="alice", public_key="pk",
    )
    assert isinstance(user, User)
    assert user.updated_at is None
