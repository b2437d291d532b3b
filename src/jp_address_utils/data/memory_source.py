from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Union

from jp_address_utils.data.base import BaseDatasetSource
from jp_address_utils.models import AddressRecord, Dataset


class InMemoryDatasetSource(BaseDatasetSource):
    """Data source over records that are already in memory.

    Accepts AddressRecord instances or plain dicts in the ken_all.json
    record layout (camelCase or snake_case keys).
    """

    def __init__(
        self,
        records: Iterable[Union[AddressRecord, dict[str, Any]]] = (),
        version: str = "memory",
    ) -> None:
        self._records = list(records)
        self._version = version

    @property
    def name(self) -> str:
        return f"memory:{self._version}"

    def _read_dataset(self) -> Dataset:
        return Dataset.model_validate({"version": self._version, "records": self._records})
