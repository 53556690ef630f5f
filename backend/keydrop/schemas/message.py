"""Message Schemas - send payload.

Invariants:
    - to/from are non-empty usernames
    - encrypted/encryptedKey are opaque client-side ciphertext, never decoded here
"""

from pydantic import BaseModel, ConfigDict, Field

from keydrop.core.entities import Message


class MessageSend(BaseModel):
    """POST /message/send body."""
    model_config = ConfigDict(populate_by_name=True)

    to: str = Field(min_length=1)
    from_: str = Field(alias="from", min_length=1)
    encrypted: str = Field(min_length=1)
    encrypted_key: str = Field(alias="encryptedKey", min_length=1)

    def to_domain(self) -> Message:
        return Message(
            to=self.to,
            from_=self.from_,
            encrypted=self.encrypted,
            encrypted_key=self.encrypted_key,
        )
