"""Payload Crypto - RSA-OAEP helpers backing the /payload endpoints.

Invariants:
    - Padding is always OAEP with MGF1(SHA-256) and SHA-256
    - Ciphertext travels as base64 text; plaintext as UTF-8 text
    - Keys read from <secrets_dir>/public.pem and <secrets_dir>/private.pem on every call
    - Any failure (missing key, bad key, bad ciphertext) raises InternalError

Design Decisions:
    - Keys read per call, not cached: rotating the files needs no restart
    - Stores and repositories never call these - message ciphertext is produced by clients
"""

import base64
import binascii
import logging
import sys
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from keydrop.core.errors import InternalError

logger = logging.getLogger(__name__)

PUBLIC_KEY_FILE = "public.pem"
PRIVATE_KEY_FILE = "private.pem"
KEY_SIZE_BITS = 2048


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def encrypt_message(message: str, secrets_dir: Path | str) -> str:
    """Encrypt UTF-8 text with the public key; returns base64 ciphertext."""
    try:
        pem = (Path(secrets_dir) / PUBLIC_KEY_FILE).read_bytes()
        public_key = serialization.load_pem_public_key(pem)
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise TypeError("public key is not an RSA key")
        encrypted = public_key.encrypt(message.encode("utf-8"), _oaep())
    except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error(f"Encryption failed: {e}")
        raise InternalError(f"Encryption failed: {e}") from e
    return base64.b64encode(encrypted).decode("ascii")


def decrypt_message(encrypted_message: str, secrets_dir: Path | str) -> str:
    """Decrypt base64 ciphertext with the private key; returns UTF-8 text."""
    try:
        pem = (Path(secrets_dir) / PRIVATE_KEY_FILE).read_bytes()
        private_key = serialization.load_pem_private_key(pem, password=None)
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise TypeError("private key is not an RSA key")
        ciphertext = base64.b64decode(encrypted_message, validate=True)
        decrypted = private_key.decrypt(ciphertext, _oaep())
        return decrypted.decode("utf-8")
    except (OSError, ValueError, TypeError, binascii.Error, UnsupportedAlgorithm) as e:
        logger.error(f"Decryption failed: {e}")
        raise InternalError(f"Decryption failed: {e}") from e


def generate_key_pair(secrets_dir: Path | str) -> tuple[Path, Path]:
    """Write a fresh RSA key pair (PKCS8 private, SPKI public). Returns (private, public) paths."""
    directory = Path(secrets_dir)
    directory.mkdir(parents=True, exist_ok=True)
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=KEY_SIZE_BITS)

    private_path = directory / PRIVATE_KEY_FILE
    public_path = directory / PUBLIC_KEY_FILE
    private_path.write_bytes(private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ))
    private_path.chmod(0o600)
    public_path.write_bytes(private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ))
    return private_path, public_path


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "secrets"
    private_path, public_path = generate_key_pair(target)
    print("Keys generated successfully:")
    print(f" - Private key: {private_path}")
    print(f" - Public key:  {public_path}")
