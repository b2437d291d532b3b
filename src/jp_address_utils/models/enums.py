"""Enumerations for address records and validation verdicts."""

from __future__ import annotations

from enum import Enum, IntEnum


class UpdateCode(IntEnum):
    """Update status of a record in the Japan Post release."""

    UNCHANGED = 0
    CHANGED = 1
    ABOLISHED = 2


class UpdateReason(IntEnum):
    """Reason code attached to a record update."""

    NONE = 0
    MUNICIPAL_REORGANIZATION = 1  # 市政・区政・町政・分区・政令指定都市施行
    RESIDENTIAL_ADDRESSING = 2  # 住居表示の実施
    LAND_READJUSTMENT = 3  # 区画整理
    POSTAL_DISTRICT_ADJUSTMENT = 4  # 郵便区調整等
    CORRECTION = 5  # 訂正
    ABOLITION = 6  # 廃止


class Confidence(str, Enum):
    """Qualitative verdict of how well an address matched the dataset."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class IndexState(str, Enum):
    """Lifecycle of a DatasetIndex."""

    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


# Column names used when address matches are exported to tabular form
MATCH_FIELDS: list[str] = [
    "postal_code",
    "prefecture",
    "city",
    "town",
    "prefecture_kana",
    "city_kana",
    "town_kana",
    "full_address",
]
