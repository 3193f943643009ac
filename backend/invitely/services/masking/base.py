"""
Base class for at-rest field masking providers.

Masking obscures PII-like columns (names, emails, phones, IPs, user agents)
in the database. It is an obfuscation policy keyed by a static secret,
not cryptographic protection of the data.
"""
from abc import ABC, abstractmethod
from typing import Optional


class FieldMasker(ABC):
    """Abstract base class for field masking providers."""

    name: str = "base"

    @abstractmethod
    def mask(self, value: Optional[str], deterministic: bool = False) -> Optional[str]:
        """
        Mask a plaintext value for storage.

        Args:
            value: Plaintext value (None and "" are returned unchanged)
            deterministic: When True the same input always yields the same
                output, so unique constraints and equality lookups keep working.

        Returns:
            Masked string
        """
        pass

    @abstractmethod
    def unmask(self, value: Optional[str]) -> Optional[str]:
        """
        Reverse mask().

        Raises:
            ValueError: If the value was not produced by this provider
        """
        pass
