from __future__ import annotations

from pathlib import Path
from typing import Union

from jp_address_utils.config import DatasetConfig
from jp_address_utils.data.base import BaseDatasetSource
from jp_address_utils.models import PACKAGE_NAME, Dataset, DatasetLoadError


class JSONDatasetSource(BaseDatasetSource):
    """Data source that reads the ken_all.json file.

    The file holds the record list, a precomputed postal code grouping and
    the release metadata. Only the records and metadata are used; the
    indexes are rebuilt on every load.
    """

    def __init__(
        self,
        path: Union[str, Path] | None = None,
        config: DatasetConfig | None = None,
    ) -> None:
        """Initialize the JSON source.

        Args:
            path: Path to the dataset file. If None, the first existing
                candidate from the config is used.
            config: Dataset configuration. Defaults to environment settings.
        """
        self._path = Path(path) if path is not None else None
        self._config = config or DatasetConfig()

    @property
    def name(self) -> str:
        return f"json:{self._path or self._config.default_output_path}"

    def resolve_path(self) -> Path:
        """Find the dataset file.

        Returns:
            Path to an existing dataset file.

        Raises:
            DatasetLoadError: If no candidate file exists.
        """
        candidates = [self._path] if self._path is not None else list(self._config.candidate_paths())
        for candidate in candidates:
            if candidate.is_file():
                return candidate

        searched = ", ".join(str(c) for c in candidates)
        raise DatasetLoadError(
            "dataset_missing",
            "Postal dataset not found (searched: {searched}); run 'jp-address fetch' first",
            {"package": PACKAGE_NAME, "searched": searched},
        )

    def _read_dataset(self) -> Dataset:
        path = self.resolve_path()
        return Dataset.model_validate_json(path.read_bytes())
