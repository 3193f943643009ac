"""
At-rest field masking providers.

The active provider is selected once from FIELD_MASKING_PROVIDER and can be
swapped with set_field_masker() (tests, scripts).
"""
from typing import Optional
from invitely.services.masking.base import FieldMasker
from invitely.services.masking.fernet import FernetFieldMasker
from invitely.services.masking.plain import PlainFieldMasker

__all__ = [
    "FieldMasker",
    "FernetFieldMasker",
    "PlainFieldMasker",
    "get_masker",
    "get_field_masker",
    "set_field_masker",
    "truncate_utf8",
]

_active_masker: Optional[FieldMasker] = None


def truncate_utf8(value: str, max_bytes: int) -> str:
    """Cut value to at most max_bytes of UTF-8 without splitting a character."""
    return value.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def get_masker(provider: str) -> FieldMasker:
    """
    Factory function to get a masking provider by name.

    Args:
        provider: Provider name ("fernet" or "plain")

    Raises:
        ValueError: If provider not supported
    """
    from invitely.core.config import MASKING_SECRET, SESSION_SECRET, DEMO_SECRET

    providers = {
        "fernet": lambda: FernetFieldMasker(MASKING_SECRET or SESSION_SECRET or DEMO_SECRET),
        "plain": PlainFieldMasker,
    }

    factory = providers.get(provider.lower())
    if not factory:
        raise ValueError(f"Unsupported masking provider: {provider}. Supported: {list(providers.keys())}")

    return factory()


def get_field_masker() -> FieldMasker:
    """Return the process-wide masking provider, creating it on first use."""
    global _active_masker
    if _active_masker is None:
        from invitely.core.config import FIELD_MASKING_PROVIDER
        _active_masker = get_masker(FIELD_MASKING_PROVIDER)
    return _active_masker


def set_field_masker(masker: Optional[FieldMasker]) -> None:
    """Replace the process-wide masking provider (None resets to config)."""
    global _active_masker
    _active_masker = masker
