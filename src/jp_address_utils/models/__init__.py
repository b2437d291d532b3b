"""Data models, result classes and errors."""

from __future__ import annotations

from jp_address_utils.models.enums import (
    MATCH_FIELDS,
    Confidence,
    IndexState,
    UpdateCode,
    UpdateReason,
)
from jp_address_utils.models.errors import (
    PACKAGE_NAME,
    DatasetLoadError,
    IndexNotLoadedError,
    JapanAddressError,
)
from jp_address_utils.models.records import AddressRecord, Dataset, IndexStats
from jp_address_utils.models.results import (
    AddressMatch,
    AddressSearchResult,
    AddressValidationResult,
    MatchOutcome,
    NormalizationResult,
    PostalLookupResult,
)

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "JapanAddressError",
    "IndexNotLoadedError",
    "DatasetLoadError",
    # Enums and constants
    "Confidence",
    "IndexState",
    "UpdateCode",
    "UpdateReason",
    "MATCH_FIELDS",
    # Dataset models
    "AddressRecord",
    "Dataset",
    "IndexStats",
    # Results
    "AddressMatch",
    "AddressSearchResult",
    "AddressValidationResult",
    "MatchOutcome",
    "NormalizationResult",
    "PostalLookupResult",
]
