"""User Schemas - registration payload.

Invariants:
    - username: 1-64 chars, stripped, non-empty
    - publicKey: non-empty, otherwise opaque
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from keydrop.core.entities import User


class UserRegister(BaseModel):
    """POST /user/register body."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1, max_length=64)
    public_key: str = Field(alias="publicKey", min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v

    def to_domain(self) -> User:
        return User(username=self.username, public_key=self.public_key)
