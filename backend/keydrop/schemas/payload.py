"""Payload Schemas - bodies for the server-side encrypt/decrypt helpers.

Invariants:
    - message: 1-190 UTF-8 bytes, the OAEP-SHA256 plaintext limit for a 2048-bit key
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_MESSAGE_BYTES = 190


class EncryptRequest(BaseModel):
    message: str = Field(min_length=1)

    @field_validator("message")
    @classmethod
    def fits_one_oaep_block(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_MESSAGE_BYTES:
            raise ValueError(f"message cannot exceed {MAX_MESSAGE_BYTES} bytes as UTF-8")
        return v


class DecryptRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    encrypted_message: str = Field(alias="encryptedMessage", min_length=1)
