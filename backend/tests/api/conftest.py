"""API test fixtures - opened document stores + FastAPI test client.

Invariants:
    - Every test gets fresh stores bound to its own tmp_path
    - Repository dependencies overridden to use the test stores
    - store_manager patched so the readiness probe sees the test stores
    - get_settings overridden so payload routes read test key material

Design Decisions:
    - Lifespan not run by ASGITransport: the fixture opens the stores itself
    - RSA keys generated once per session (key generation dominates test time)
"""

import pytest
from httpx import ASGITransport, AsyncClient

import keydrop.infrastructure.store_manager as store_module
from keydrop.config import Settings, get_settings
from keydrop.infrastructure.payload_crypto import generate_key_pair
from keydrop.infrastructure.store_manager import (
    DocumentStoreManager, get_message_repository, get_user_repository,
)
from keydrop.main import app


@pytest.fixture(scope="session")
def api_secrets_dir(tmp_path_factory):
    directory = tmp_path_factory.mktemp("api-secrets")
    generate_key_pair(directory)
    return directory


@pytest.fixture
async def stores(data_dir):
    manager = DocumentStoreManager(data_dir)
    await manager.open()
    yield manager
    await manager.close()


@pytest.fixture
async def client(stores, data_dir, api_secrets_dir):
    """FastAPI test client with store and settings dependencies overridden."""
    test_settings = Settings(data_dir=data_dir, secrets_dir=api_secrets_dir)
    app.dependency_overrides[get_user_repository] = lambda: stores.users
    app.dependency_overrides[get_message_repository] = lambda: stores.messages
    app.dependency_overrides[get_settings] = lambda: test_settings

    original_manager = store_module.store_manager
    store_module.store_manager = stores

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    store_module.store_manager = original_manager
