"""Domain Types - verifies identity wrappers and collection names.

Tests:
    - NewType wrappers exist and are transparent at runtime
    - CollectionName values are the on-disk file stems
"""

from keydrop.core.domain_types import CollectionName, EntityId, Username


def test_identity_types_wrap_str():
    assert EntityId("abc") == "abc"
    assert Username("alice") == "alice"


def test_collection_names_are_file_stems():
    assert {c.value for c in CollectionName} == {"users", "messages"}
    assert CollectionName.USERS == "users"
