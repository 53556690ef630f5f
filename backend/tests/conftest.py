"""Root conftest - shared test configuration and document store fixtures."""

import os

import pytest

# Keep test runs off the real data/ and secrets/ directories
os.environ.setdefault("DATA_DIR", "test-data")
os.environ.setdefault("SECRETS_DIR", "test-secrets")
os.environ.setdefault("LOG_FORMAT", "text")

from keydrop.core.entities import MessageEntity, UserEntity  # noqa: E402
from keydrop.infrastructure.document_store import DocumentStore  # noqa: E402


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
async def user_store(data_dir):
    store = DocumentStore("users", data_dir, UserEntity)
    await store.open()
    yield store
    await store.close()


@pytest.fixture
async def message_store(data_dir):
    store = DocumentStore("messages", data_dir, MessageEntity)
    await store.open()
    yield store
    await store.close()
