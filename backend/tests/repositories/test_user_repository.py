"""User Repository - tightened not-found semantics and username uniqueness.

Tests:
    - read() raises ResourceNotFoundError instead of returning None
    - read_by_username returns the match or None
    - duplicate usernames rejected on create and update
    - list/update/delete pass through to the store
"""

import pytest

from keydrop.core.entities import User, UserUpdate
from keydrop.core.errors import ConflictError, ResourceNotFoundError
from keydrop.repositories.user_repository import UserRepository


@pytest.fixture
def users(user_store):
    return UserRepository(user_store)


async def test_create_then_read(users):
    created = await users.create(User(username="alice", public_key="pk"))
    assert await users.read(created.id) == created


async def test_read_missing_raises_not_found(users):
    with pytest.raises(ResourceNotFoundError, match="User not found"):
        await users.read("missing-id")


async def test_read_by_username(users):
    alice = await users.create(User(username="alice", public_key="pk-a"))
    await users.create(User(username="bob", public_key="pk-b"))

    assert await users.read_by_username("alice") == alice
    assert await users.read_by_username("carol") is None


async def test_duplicate_username_is_conflict(users):
    await users.create(User(username="alice", public_key="pk"))
    with pytest.raises(ConflictError):
        await users.create(User(username="alice", public_key="other"))
    assert len(await users.list()) == 1


async def test_update_to_taken_username_is_conflict(users):
    await users.create(User(username="alice", public_key="pk"))
    bob = await users.create(User(username="bob", public_key="pk"))
    with pytest.raises(ConflictError):
        await users.update(bob.id, UserUpdate(username="alice"))


async def test_update_public_key_keeps_username(users):
    alice = await users.create(User(username="alice", public_key="old"))
    updated = await users.update(alice.id, UserUpdate(public_key="new"))
    assert updated.username == "alice"
    assert updated.public_key == "new"


async def test_delete_then_read_raises(users):
    alice = await users.create(User(username="alice", public_key="pk"))
    await users.delete(alice.id)
    with pytest.raises(ResourceNotFoundError):
        await users.read(alice.id)
    with pytest.raises(ResourceNotFoundError):
        await users.delete(alice.id)
