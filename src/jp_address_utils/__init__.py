"""jp-address-utils: Japanese postal code lookup, address normalization and validation.

This package provides:
- An in-memory index over the Japan Post KEN_ALL dataset
- A text normalizer for Japanese address notation variants
- Address search and heuristic suggestions
- Address validation with confidence scoring
- Pandas, FastAPI and command line integration

Quick Start:
    >>> from jp_address_utils import JapanAddressService
    >>> service = JapanAddressService().load()
    >>> service.postal_to_address("100-0001").addresses[0].full_address
    '東京都千代田区千代田'

    # Normalization needs no dataset
    >>> service.normalize("東京都千代田区１丁目２番３号").normalized
    '東京都千代田区1-2-3'

    # Validation
    >>> result = service.validate("東京都千代田区千代田")
    >>> result.confidence
    <Confidence.HIGH: 'high'>

    # Fetch the dataset first with:
    #   jp-address fetch
"""

from __future__ import annotations

from jp_address_utils.config import DatasetConfig
from jp_address_utils.core import (
    NormalizationStage,
    NormalizeOptions,
    PostalCodeNormalizer,
    PostalCodeResult,
    TextNormalizer,
    normalize,
)
from jp_address_utils.data import (
    PREFECTURES,
    BaseDatasetSource,
    DatasetSourceFactory,
    InMemoryDatasetSource,
    JSONDatasetSource,
)
from jp_address_utils.index import DatasetIndex
from jp_address_utils.matching import AddressMatcher
from jp_address_utils.models import (
    PACKAGE_NAME,
    AddressMatch,
    AddressRecord,
    AddressSearchResult,
    AddressValidationResult,
    Confidence,
    Dataset,
    DatasetLoadError,
    IndexNotLoadedError,
    IndexState,
    IndexStats,
    JapanAddressError,
    MatchOutcome,
    NormalizationResult,
    PostalLookupResult,
)
from jp_address_utils.protocols import AddressIndexProtocol, DatasetSourceProtocol
from jp_address_utils.service import JapanAddressService
from jp_address_utils.validation import AddressValidator

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main service
    "JapanAddressService",
    # Core components
    "DatasetIndex",
    "AddressMatcher",
    "AddressValidator",
    "TextNormalizer",
    "NormalizationStage",
    "NormalizeOptions",
    "normalize",
    "PostalCodeNormalizer",
    "PostalCodeResult",
    # Data
    "DatasetConfig",
    "BaseDatasetSource",
    "JSONDatasetSource",
    "InMemoryDatasetSource",
    "DatasetSourceFactory",
    "PREFECTURES",
    # Protocols
    "AddressIndexProtocol",
    "DatasetSourceProtocol",
    # Models
    "AddressRecord",
    "Dataset",
    "IndexStats",
    "IndexState",
    "Confidence",
    "AddressMatch",
    "PostalLookupResult",
    "AddressSearchResult",
    "NormalizationResult",
    "MatchOutcome",
    "AddressValidationResult",
    # Errors
    "PACKAGE_NAME",
    "JapanAddressError",
    "IndexNotLoadedError",
    "DatasetLoadError",
]
