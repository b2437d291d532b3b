from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from jp_address_utils.config import DatasetConfig
from jp_address_utils.core.normalizer import DEFAULT_OPTIONS, NormalizeOptions, TextNormalizer
from jp_address_utils.core.postal_code import PostalCodeNormalizer
from jp_address_utils.data import DatasetSourceFactory
from jp_address_utils.index import DatasetIndex
from jp_address_utils.matching import AddressMatcher
from jp_address_utils.models import (
    AddressMatch,
    AddressSearchResult,
    AddressValidationResult,
    IndexNotLoadedError,
    IndexState,
    IndexStats,
    NormalizationResult,
    PostalLookupResult,
)
from jp_address_utils.protocols import DatasetSourceProtocol
from jp_address_utils.validation import AddressValidator

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_SEARCH_RESULTS = 20

SHORT_QUERY_MESSAGE = "Address query must be at least 2 characters"

# Columns added by validate_dataframe()
VALIDATION_COLUMNS = ["valid", "confidence", "normalized_address", "postal_code", "issues"]


class JapanAddressService:
    """High-level service for Japanese postal code and address operations.

    Owns one dataset index plus the matcher and validator built on it.
    Nothing is loaded implicitly: call load() (or aload()) once at startup.

    Example:
        >>> service = JapanAddressService().load()
        >>> service.postal_to_address("100-0001").addresses[0].full_address
        '東京都千代田区千代田'

        # Custom source
        >>> from jp_address_utils.data import JSONDatasetSource
        >>> service = JapanAddressService(source=JSONDatasetSource("/path/to/ken_all.json"))
    """

    def __init__(
        self,
        source: Optional[DatasetSourceProtocol] = None,
        index: Optional[DatasetIndex] = None,
        normalizer: Optional[TextNormalizer] = None,
        config: Optional[DatasetConfig] = None,
    ) -> None:
        """Initialize the service.

        Args:
            source: Dataset source. Defaults to the JSON source built from config.
            index: Dataset index. Defaults to a new, unloaded index.
            normalizer: Text normalizer. Defaults to the standard stage list.
            config: Dataset configuration for the default source.
        """
        self._config = config or DatasetConfig()
        self._source = source
        self._index = index or DatasetIndex()
        self._normalizer = normalizer or TextNormalizer()
        self._matcher = AddressMatcher(self._index)
        self._validator = AddressValidator(self._matcher, self._normalizer)
        self._postal_codes = PostalCodeNormalizer()

    @property
    def source(self) -> DatasetSourceProtocol:
        """Get the dataset source, creating the default JSON source on first use."""
        if self._source is None:
            self._source = DatasetSourceFactory.create("json", config=self._config)
        return self._source

    @property
    def index(self) -> DatasetIndex:
        return self._index

    @property
    def matcher(self) -> AddressMatcher:
        return self._matcher

    @property
    def validator(self) -> AddressValidator:
        return self._validator

    @property
    def state(self) -> IndexState:
        return self._index.state

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> JapanAddressService:
        """Load the dataset into the index.

        Raises:
            DatasetLoadError: If the source is missing or malformed.
        """
        self._index.load(self.source)
        return self

    async def aload(self) -> JapanAddressService:
        """Awaitable load(); safe to call from several tasks at once."""
        await self._index.aload(self.source)
        return self

    def ensure_loaded(self) -> JapanAddressService:
        """Load unless the index is already ready."""
        if not self._index.is_loaded:
            self.load()
        return self

    def stats(self) -> Optional[IndexStats]:
        """Dataset summary, or None if nothing is loaded."""
        return self._index.stats()

    def _require_ready(self) -> None:
        if not self._index.is_loaded:
            raise IndexNotLoadedError.for_state(self._index.state.value)

    # -------------------------------------------------------------------------
    # Request operations
    # -------------------------------------------------------------------------

    def postal_to_address(self, postal_code: str) -> PostalLookupResult:
        """Look up the addresses for a postal code.

        Args:
            postal_code: Postal code with or without a hyphen.

        Returns:
            PostalLookupResult; success carries the NNN-NNNN code and every
            record in dataset order.

        Raises:
            IndexNotLoadedError: If the dataset is not loaded.
        """
        self._require_ready()

        parsed = self._postal_codes.parse(postal_code)
        if not parsed.is_valid or parsed.digits is None:
            return PostalLookupResult(success=False, postal_code=postal_code, error=parsed.error)

        records = self._matcher.find_by_postal_code(parsed.digits)
        if not records:
            return PostalLookupResult(
                success=False,
                postal_code=postal_code,
                error=f"No address found for postal code {postal_code}",
            )

        return PostalLookupResult(
            success=True,
            postal_code=parsed.formatted or postal_code,
            addresses=[AddressMatch.from_record(r) for r in records],
        )

    def address_to_postal(self, address: str) -> AddressSearchResult:
        """Search postal codes for an address or address fragment.

        Args:
            address: Address text; at least 2 characters after trimming.

        Returns:
            AddressSearchResult with at most 20 matches.

        Raises:
            IndexNotLoadedError: If the dataset is not loaded.
        """
        self._require_ready()

        query = (address or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return AddressSearchResult(success=False, query=address, error=SHORT_QUERY_MESSAGE)

        records = self._matcher.find_by_address(query)
        if not records:
            return AddressSearchResult(
                success=False,
                query=address,
                error=f"No address matches '{address}'",
            )

        return AddressSearchResult(
            success=True,
            query=address,
            results=[AddressMatch.from_record(r) for r in records[:MAX_SEARCH_RESULTS]],
        )

    def normalize(
        self,
        text: str,
        options: Optional[NormalizeOptions] = None,
        **overrides: Any,
    ) -> NormalizationResult:
        """Normalize address text. Needs no loaded dataset.

        Args:
            text: Address text.
            options: Stage switches. Defaults to DEFAULT_OPTIONS.
            **overrides: Individual switches (snake_case or camelCase)
                applied on top of options.
        """
        opts = options or DEFAULT_OPTIONS
        if overrides:
            by_alias = {f.alias: name for name, f in NormalizeOptions.model_fields.items() if f.alias}
            updates = {by_alias.get(key, key): value for key, value in overrides.items()}
            opts = NormalizeOptions.model_validate({**opts.model_dump(), **updates})
        return self._normalizer.normalize(text, opts)

    def validate(self, address: str) -> AddressValidationResult:
        """Validate and score an address string.

        Raises:
            IndexNotLoadedError: If the dataset is not loaded.
        """
        return self._validator.assess(address)

    # -------------------------------------------------------------------------
    # Pandas integration
    # -------------------------------------------------------------------------

    def validate_dataframe(
        self,
        df: pd.DataFrame,
        address_column: str,
        *,
        prefix: str = "",
        inplace: bool = False,
    ) -> pd.DataFrame:
        """Validate the addresses in a DataFrame column.

        Args:
            df: Input DataFrame.
            address_column: Name of column containing addresses.
            prefix: Prefix for new column names.
            inplace: If True, modify df in place.

        Returns:
            DataFrame with valid, confidence, normalized_address,
            postal_code and issues columns added.
        """
        import pandas as pd

        self._require_ready()
        if not inplace:
            df = df.copy()

        columns: dict[str, list[Any]] = {col: [] for col in VALIDATION_COLUMNS}
        for value in df[address_column]:
            text = "" if pd.isna(value) else str(value)
            result = self._validator.assess(text)
            columns["valid"].append(result.valid)
            columns["confidence"].append(result.confidence.value)
            columns["normalized_address"].append(result.normalized_address)
            columns["postal_code"].append(
                result.matched_records[0].postal_code if result.matched_records else None
            )
            columns["issues"].append("; ".join(result.issues))

        for col in VALIDATION_COLUMNS:
            df[f"{prefix}{col}"] = pd.Series(columns[col], index=df.index, dtype=object)

        logger.debug("Validated %d addresses from column %s", len(df), address_column)
        return df
