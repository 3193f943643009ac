"""
Default masking provider built on the cryptography library.

Non-deterministic fields use Fernet (random IV per value). Deterministic
fields use AES-SIV, which produces the same token for the same plaintext.
"""
import base64
import hashlib
import logging
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESSIV
from invitely.services.masking.base import FieldMasker

logger = logging.getLogger(__name__)

DETERMINISTIC_PREFIX = "siv:"


class FernetFieldMasker(FieldMasker):
    """Fernet for random masking, AES-SIV for deterministic masking."""

    name = "fernet"

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Masking secret not configured. Cannot mask fields.")
        # Fernet needs a urlsafe base64 32-byte key, AES-SIV a 64-byte key
        fernet_key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode()).digest())
        self._fernet = Fernet(fernet_key)
        self._siv = AESSIV(hashlib.sha512(secret.encode()).digest())

    def mask(self, value: Optional[str], deterministic: bool = False) -> Optional[str]:
        if not value:
            return value

        if deterministic:
            token = self._siv.encrypt(value.encode(), None)
            return DETERMINISTIC_PREFIX + base64.urlsafe_b64encode(token).decode()

        return self._fernet.encrypt(value.encode()).decode()

    def unmask(self, value: Optional[str]) -> Optional[str]:
        if not value:
            return value

        try:
            if value.startswith(DETERMINISTIC_PREFIX):
                token = base64.urlsafe_b64decode(value[len(DETERMINISTIC_PREFIX):].encode())
                return self._siv.decrypt(token, None).decode()
            return self._fernet.decrypt(value.encode()).decode()
        except (InvalidToken, InvalidTag, ValueError) as e:
            logger.error(f"Failed to unmask field: {e}")
            raise ValueError(f"Unmasking failed: {e}")
