"""In-memory dataset index.

DatasetIndex owns the two lookup tables built from the reference dataset:
postal code -> records and prefecture+city+town -> records. It is built
exactly once per instance; concurrent load() calls share the same build.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from concurrent.futures import Future
from typing import Optional, Union

from jp_address_utils.core.postal_code import PostalCodeNormalizer
from jp_address_utils.models import (
    PACKAGE_NAME,
    AddressRecord,
    Dataset,
    DatasetLoadError,
    IndexNotLoadedError,
    IndexState,
    IndexStats,
)
from jp_address_utils.protocols import DatasetSourceProtocol

logger = logging.getLogger(__name__)

DatasetInput = Union[Dataset, DatasetSourceProtocol]


class DatasetIndex:
    """Read-only lookup tables over a loaded Dataset.

    Example:
        >>> index = DatasetIndex().load(JSONDatasetSource())
        >>> index.lookup_by_postal_code("1000001")
        (AddressRecord(...),)

    All lookups raise IndexNotLoadedError until the state is READY. Once
    ready the tables are never mutated, so reads take no lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = IndexState.NOT_LOADED
        self._inflight: Optional[Future[DatasetIndex]] = None

        self._by_postal_code: dict[str, tuple[AddressRecord, ...]] = {}
        self._by_address_key: dict[str, tuple[AddressRecord, ...]] = {}
        self._keys: tuple[str, ...] = ()
        self._stats: Optional[IndexStats] = None

    @property
    def state(self) -> IndexState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is IndexState.READY

    def load(self, source: DatasetInput) -> DatasetIndex:
        """Build the index from a dataset or a dataset source.

        Calling load() on a ready index is a no-op. If another thread is
        already loading, this call waits for that build and returns (or
        raises) its outcome. After a failed build a new call retries.

        Args:
            source: A Dataset or any object with load_dataset().

        Returns:
            This index, ready for lookups.

        Raises:
            DatasetLoadError: If the source is missing or malformed.
        """
        with self._lock:
            if self._state is IndexState.READY:
                return self
            future = self._inflight
            owner = future is None
            if future is None:
                future = Future()
                self._inflight = future
                self._state = IndexState.LOADING

        if not owner:
            return future.result()

        started = time.perf_counter()
        try:
            tables = self._build(source)
        except BaseException as exc:
            with self._lock:
                self._state = IndexState.FAILED
                self._inflight = None
            if not isinstance(exc, Exception):
                # Interrupts reach waiters unwrapped
                future.set_exception(exc)
                raise
            error = DatasetLoadError.wrap(exc)
            logger.warning("Dataset index load failed: %s", error)
            future.set_exception(error)
            if error is exc:
                raise
            raise error from exc

        by_postal_code, by_address_key, stats = tables
        with self._lock:
            self._by_postal_code = by_postal_code
            self._by_address_key = by_address_key
            self._keys = tuple(by_address_key)
            self._stats = stats
            self._state = IndexState.READY
            self._inflight = None

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Loaded %d records (%d postal codes, %d address keys) in %.0fms",
            stats.total_records,
            len(by_postal_code),
            len(by_address_key),
            elapsed_ms,
        )
        future.set_result(self)
        return self

    async def aload(self, source: DatasetInput) -> DatasetIndex:
        """Awaitable load(); runs the build in a worker thread."""
        return await asyncio.to_thread(self.load, source)

    def _build(
        self, source: DatasetInput
    ) -> tuple[dict[str, tuple[AddressRecord, ...]], dict[str, tuple[AddressRecord, ...]], IndexStats]:
        dataset = source if isinstance(source, Dataset) else source.load_dataset()

        by_postal_code: dict[str, list[AddressRecord]] = {}
        by_address_key: dict[str, list[AddressRecord]] = {}

        for position, record in enumerate(dataset.records):
            if not PostalCodeNormalizer.is_canonical(record.postal_code):
                raise DatasetLoadError(
                    "dataset_malformed",
                    "Record {position} has malformed postal code '{postal_code}'",
                    {
                        "package": PACKAGE_NAME,
                        "position": position,
                        "postal_code": record.postal_code,
                    },
                )
            by_postal_code.setdefault(record.postal_code, []).append(record)
            by_address_key.setdefault(record.composite_key, []).append(record)

        stats = IndexStats(
            total_records=dataset.total_records,
            unique_postal_codes=dataset.unique_postal_codes,
            version=dataset.version,
        )
        return (
            {code: tuple(bucket) for code, bucket in by_postal_code.items()},
            {key: tuple(bucket) for key, bucket in by_address_key.items()},
            stats,
        )

    def _require_ready(self) -> None:
        if self._state is not IndexState.READY:
            raise IndexNotLoadedError.for_state(self._state.value)

    def lookup_by_postal_code(self, postal_code: str) -> tuple[AddressRecord, ...]:
        """Records for an exact 7-digit code; empty for any other input."""
        self._require_ready()
        if not isinstance(postal_code, str) or not PostalCodeNormalizer.is_canonical(postal_code):
            return ()
        return self._by_postal_code.get(postal_code, ())

    def lookup_by_address_key(self, key: str) -> tuple[AddressRecord, ...]:
        """Records whose prefecture+city+town equals the key exactly."""
        self._require_ready()
        return self._by_address_key.get(key, ())

    def all_keys(self) -> tuple[str, ...]:
        """Composite address keys in dataset insertion order."""
        self._require_ready()
        return self._keys

    def stats(self) -> Optional[IndexStats]:
        """Dataset summary, or None when the index is not ready."""
        if self._state is not IndexState.READY:
            return None
        return self._stats
