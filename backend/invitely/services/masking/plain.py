"""
Identity masking provider for local demos and fixtures.
"""
from typing import Optional
from invitely.services.masking.base import FieldMasker


class PlainFieldMasker(FieldMasker):
    """Stores values as-is."""

    name = "plain"

    def mask(self, value: Optional[str], deterministic: bool = False) -> Optional[str]:
        return value

    def unmask(self, value: Optional[str]) -> Optional[str]:
        return value
