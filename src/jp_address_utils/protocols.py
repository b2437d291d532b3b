from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from jp_address_utils.models import AddressRecord, Dataset, IndexStats


@runtime_checkable
class DatasetSourceProtocol(Protocol):
    """Protocol for reference dataset suppliers.

    Implementations produce an already-parsed, already-decoded Dataset from
    whatever persisted form they own (JSON file, memory, database, etc.).
    """

    def load_dataset(self) -> Dataset:
        """Produce the dataset.

        Returns:
            The full Dataset.

        Raises:
            DatasetLoadError: If the source is missing or malformed.
        """
        ...


@runtime_checkable
class AddressIndexProtocol(Protocol):
    """Protocol for the read side of a loaded dataset index."""

    def lookup_by_postal_code(self, postal_code: str) -> Sequence[AddressRecord]:
        """Records sharing a 7-digit postal code (empty if malformed)."""
        ...

    def lookup_by_address_key(self, key: str) -> Sequence[AddressRecord]:
        """Records sharing an exact prefecture+city+town key."""
        ...

    def all_keys(self) -> Sequence[str]:
        """All composite address keys in dataset insertion order."""
        ...

    def stats(self) -> IndexStats | None:
        """Dataset summary, or None if nothing is loaded."""
        ...
