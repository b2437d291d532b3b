from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from jp_address_utils.models import Dataset, DatasetLoadError

logger = logging.getLogger(__name__)


class BaseDatasetSource(ABC):
    """Abstract base class for reference dataset sources.

    Subclasses implement _read_dataset(); load_dataset() turns any failure
    into a DatasetLoadError so callers only have one error to handle.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short description of the source for logs and errors."""
        ...

    @abstractmethod
    def _read_dataset(self) -> Dataset:
        """Read and validate the dataset.

        Returns:
            The parsed Dataset.

        Raises:
            Exception: Any error reading or validating the source.
        """
        ...

    def load_dataset(self) -> Dataset:
        """Produce the dataset.

        Returns:
            The parsed Dataset.

        Raises:
            DatasetLoadError: If the source is missing or malformed.
        """
        try:
            dataset = self._read_dataset()
        except Exception as exc:
            logger.warning("Failed to read dataset from %s: %s", self.name, exc)
            raise DatasetLoadError.wrap(exc, source=self.name) from exc

        logger.debug("Read %d records from %s", len(dataset.records), self.name)
        return dataset
