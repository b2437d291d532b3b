"""Core text utilities: postal code handling and the normalization pipeline.

Usage:
    from jp_address_utils.core import (
        # Normalization pipeline
        NormalizeOptions,
        NormalizationStage,
        TextNormalizer,
        normalize,
        # Postal codes
        PostalCodeNormalizer,
        PostalCodeResult,
    )
"""

from __future__ import annotations

from jp_address_utils.core.normalizer import (
    DEFAULT_OPTIONS,
    STAGES,
    NormalizationStage,
    NormalizeOptions,
    TextNormalizer,
    normalize,
)
from jp_address_utils.core.postal_code import (
    INVALID_FORMAT_MESSAGE,
    PostalCodeNormalizer,
    PostalCodeResult,
)

__all__ = [
    # Normalization
    "DEFAULT_OPTIONS",
    "STAGES",
    "NormalizationStage",
    "NormalizeOptions",
    "TextNormalizer",
    "normalize",
    # Postal codes
    "INVALID_FORMAT_MESSAGE",
    "PostalCodeNormalizer",
    "PostalCodeResult",
]
