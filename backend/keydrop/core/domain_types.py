"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - EntityId wraps the store-assigned identity string - never a bare str in repository signatures
    - Username is an opaque string; the store never interprets it
    - Collection names encoded as an Enum - one JSON file per member

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and file names without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", str)
Username = NewType("Username", str)


# ─── Enums ───────────────────────────────────────────────────────

class CollectionName(str, Enum):
    """Persisted collections - each maps to `<data_dir>/<value>.json`."""
    USERS = "users"
    MESSAGES = "messages"
