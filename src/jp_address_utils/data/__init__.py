"""Reference dataset sources.

This module provides the dataset source implementations, the source
factory and the KEN_ALL conversion helpers.
"""

from __future__ import annotations

from jp_address_utils.data.base import BaseDatasetSource
from jp_address_utils.data.constants import (
    FRAGMENT_DELIMITERS,
    MIN_FRAGMENT_LENGTH,
    PREFECTURE_BY_CODE,
    PREFECTURES,
    find_prefecture,
)
from jp_address_utils.data.factory import DatasetSourceFactory
from jp_address_utils.data.json_source import JSONDatasetSource
from jp_address_utils.data.ken_all import (
    KEN_ALL_COLUMNS,
    build_dataset_payload,
    download_ken_all,
    extract_ken_all_csv,
    fetch_ken_all,
    parse_ken_all_rows,
    read_ken_all_csv,
    write_dataset_json,
)
from jp_address_utils.data.memory_source import InMemoryDatasetSource

__all__ = [
    "BaseDatasetSource",
    "JSONDatasetSource",
    "InMemoryDatasetSource",
    "DatasetSourceFactory",
    # Prefectures
    "PREFECTURES",
    "PREFECTURE_BY_CODE",
    "FRAGMENT_DELIMITERS",
    "MIN_FRAGMENT_LENGTH",
    "find_prefecture",
    # KEN_ALL
    "KEN_ALL_COLUMNS",
    "build_dataset_payload",
    "download_ken_all",
    "extract_ken_all_csv",
    "fetch_ken_all",
    "parse_ken_all_rows",
    "read_ken_all_csv",
    "write_dataset_json",
]
