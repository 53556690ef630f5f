"""Payload Routes - server-side RSA encrypt/decrypt helpers.

Invariants:
    - Keys come from settings.secrets_dir; missing keys → 500 (InternalError)
    - Handlers are sync: RSA is CPU-bound, FastAPI runs them in the threadpool
"""

from fastapi import APIRouter, Depends

from keydrop.config import Settings, get_settings
from keydrop.infrastructure.payload_crypto import decrypt_message, encrypt_message
from keydrop.schemas.payload import DecryptRequest, EncryptRequest

router = APIRouter(prefix="/payload", tags=["payload"])


@router.post("/encrypt")
def encrypt_payload(
    body: EncryptRequest, settings: Settings = Depends(get_settings),
):
    """Encrypt a message with the server public key."""
    encrypted = encrypt_message(body.message, settings.secrets_dir)
    return {
        "message": "Message encrypted successfully",
        "encryptedMessage": encrypted,
    }


@router.post("/decrypt")
def decrypt_payload(
    body: DecryptRequest, settings: Settings = Depends(get_settings),
):
    """Decrypt a base64 message with the server private key."""
    decrypted = decrypt_message(body.encrypted_message, settings.secrets_dir)
    return {
        "message": "Message decrypted successfully",
        "decryptedMessage": decrypted,
    }
