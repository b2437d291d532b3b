"""Postal code normalization and validation utilities.

Japanese postal codes are 7 digits, conventionally written NNN-NNNN. Input
arrives in either form, sometimes with stray whitespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEPARATORS = re.compile(r"[\s-]")
_SEVEN_DIGITS = re.compile(r"[0-9]{7}")

INVALID_FORMAT_MESSAGE = "Invalid postal code format: expected 7 digits"


@dataclass(frozen=True)
class PostalCodeResult:
    """Result of postal code parsing.

    Attributes:
        digits: The 7-digit code without separators (None if invalid).
        formatted: The NNN-NNNN display form (None if invalid).
        is_valid: True if the input reduces to exactly 7 digits.
        error: Error message if invalid, None otherwise.
    """

    digits: str | None
    formatted: str | None
    is_valid: bool
    error: str | None


class PostalCodeNormalizer:
    """Single place for postal code cleaning, checking and formatting.

    Example:
        >>> normalizer = PostalCodeNormalizer()
        >>> normalizer.parse("100-0001").digits
        '1000001'
        >>> normalizer.parse("1000001").formatted
        '100-0001'
    """

    @staticmethod
    def clean(postal_code: str) -> str:
        """Strip hyphens and whitespace."""
        return _SEPARATORS.sub("", postal_code)

    @staticmethod
    def is_canonical(postal_code: str) -> bool:
        """True if the string is exactly 7 ASCII digits."""
        return _SEVEN_DIGITS.fullmatch(postal_code) is not None

    @staticmethod
    def format(digits: str) -> str:
        """Format 7 digits as NNN-NNNN."""
        return f"{digits[:3]}-{digits[3:]}"

    def parse(self, postal_code: str | None) -> PostalCodeResult:
        """Parse any accepted postal code spelling.

        Args:
            postal_code: Raw input such as "100-0001", "1000001" or " 100 0001 ".

        Returns:
            PostalCodeResult with the canonical digits or an error.
        """
        if not postal_code or not isinstance(postal_code, str):
            return PostalCodeResult(None, None, False, INVALID_FORMAT_MESSAGE)

        cleaned = self.clean(postal_code)
        if not self.is_canonical(cleaned):
            return PostalCodeResult(None, None, False, INVALID_FORMAT_MESSAGE)

        return PostalCodeResult(
            digits=cleaned,
            formatted=self.format(cleaned),
            is_valid=True,
            error=None,
        )

    def to_digits(self, postal_code: str | None) -> str | None:
        """Return the canonical 7 digits, or None if the input is malformed."""
        return self.parse(postal_code).digits
