from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DATASET_FILENAME = "ken_all.json"
KEN_ALL_URL = "https://www.post.japanpost.jp/zipcode/dl/kogaki/zip/ken_all.zip"


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value).expanduser() if value else None


@dataclass
class DatasetConfig:
    """Where the reference dataset lives and where it is fetched from.

    Every default can be overridden through the environment:
    JP_ADDRESS_DATA_PATH, JP_ADDRESS_DATA_DIR, JP_ADDRESS_KEN_ALL_URL and
    JP_ADDRESS_HTTP_TIMEOUT.
    """

    data_path: Optional[Path] = field(default_factory=lambda: _env_path("JP_ADDRESS_DATA_PATH"))
    data_dir: Path = field(
        default_factory=lambda: _env_path("JP_ADDRESS_DATA_DIR") or Path.cwd() / "data"
    )
    source_url: str = field(default_factory=lambda: os.getenv("JP_ADDRESS_KEN_ALL_URL", KEN_ALL_URL))
    http_timeout: float = field(
        default_factory=lambda: float(os.getenv("JP_ADDRESS_HTTP_TIMEOUT", "60"))
    )

    @property
    def default_output_path(self) -> Path:
        """Path the fetch command writes to."""
        return self.data_path or self.data_dir / DATASET_FILENAME

    def candidate_paths(self) -> Iterator[Path]:
        """Dataset locations to try, most specific first."""
        if self.data_path is not None:
            yield self.data_path
        yield self.data_dir / DATASET_FILENAME
