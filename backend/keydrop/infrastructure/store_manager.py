"""Store Manager - owns one DocumentStore per collection and gates readiness on their load.

Invariants:
    - Exactly one store per collection name - no two stores bound to the same file
    - open() awaits every store's load; a failure is logged and re-raised (startup aborts)
    - Repository dependencies refuse to serve until init_stores() has run

Design Decisions:
    - Singleton store_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - Repositories built here and injected via FastAPI dependencies - routes never
      construct stores themselves
"""

import logging
from pathlib import Path

from keydrop.core.domain_types import CollectionName
from keydrop.core.entities import MessageEntity, UserEntity
from keydrop.infrastructure.document_store import DocumentStore
from keydrop.repositories.message_repository import MessageRepository
from keydrop.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class DocumentStoreManager:
    """Builds, opens and closes the user and message stores."""

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)
        self.user_store: DocumentStore[UserEntity] = DocumentStore(
            CollectionName.USERS.value, self.data_dir, UserEntity,
        )
        self.message_store: DocumentStore[MessageEntity] = DocumentStore(
            CollectionName.MESSAGES.value, self.data_dir, MessageEntity,
        )
        self.users = UserRepository(self.user_store)
        self.messages = MessageRepository(self.message_store)

    @property
    def stores(self) -> tuple[DocumentStore, ...]:
        return (self.user_store, self.message_store)

    async def open(self) -> None:
        """Load every store; readiness is reached only when all succeed."""
        for store in self.stores:
            try:
                await store.open()
            except Exception as e:
                logger.error(
                    f"Failed to open document store '{store.collection}': {e}",
                    extra={"collection": store.collection},
                )
                raise

    async def close(self) -> None:
        for store in self.stores:
            await store.close()

    def health_check(self) -> bool:
        """True once every store is open (for readiness probes)."""
        return all(store.is_open for store in self.stores)


# Singleton (initialized on startup)
store_manager: DocumentStoreManager | None = None


def init_stores(data_dir: Path | str) -> DocumentStoreManager:
    global store_manager
    store_manager = DocumentStoreManager(data_dir)
    return store_manager


def get_user_repository() -> UserRepository:
    """FastAPI dependency for the user repository."""
    if not store_manager:
        raise RuntimeError("Document stores not initialized")
    return store_manager.users


def get_message_repository() -> MessageRepository:
    """FastAPI dependency for the message repository."""
    if not store_manager:
        raise RuntimeError("Document stores not initialized")
    return store_manager.messages
