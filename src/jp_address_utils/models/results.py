"""Result classes returned by the public operations.

Lookups and validation never raise for bad input; they report the outcome
through these dataclasses instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from abstract_validation_base import ProcessEntry, ProcessLog

from jp_address_utils.models.enums import MATCH_FIELDS, Confidence
from jp_address_utils.models.records import AddressRecord


@dataclass(frozen=True)
class AddressMatch:
    """Presentation view of an AddressRecord."""

    postal_code: str
    prefecture: str
    city: str
    town: str
    prefecture_kana: str
    city_kana: str
    town_kana: str
    full_address: str

    @classmethod
    def from_record(cls, record: AddressRecord) -> AddressMatch:
        """Build the view, formatting the postal code as NNN-NNNN."""
        return cls(
            postal_code=record.formatted_postal_code,
            prefecture=record.prefecture,
            city=record.city,
            town=record.town,
            prefecture_kana=record.prefecture_kana,
            city_kana=record.city_kana,
            town_kana=record.town_kana,
            full_address=record.full_address,
        )

    def to_dict(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in MATCH_FIELDS}


@dataclass
class PostalLookupResult:
    """Result of a postal code to address lookup."""

    success: bool
    postal_code: str
    addresses: list[AddressMatch] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "postal_code": self.postal_code,
            "addresses": [a.to_dict() for a in self.addresses],
            "error": self.error,
        }


@dataclass
class AddressSearchResult:
    """Result of an address to postal code search."""

    success: bool
    query: str
    results: list[AddressMatch] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "query": self.query,
            "results": [r.to_dict() for r in self.results],
            "error": self.error,
        }


@dataclass
class NormalizationResult:
    """Result of running the text normalization pipeline.

    Attributes:
        original: Input text as given.
        normalized: Text after every enabled stage ran.
        changes: Labels of the stages that altered the text, in pipeline order.
        process_log: One cleaning entry per altering stage, with before/after values.
    """

    original: str
    normalized: str
    changes: list[str] = field(default_factory=list)
    process_log: ProcessLog = field(default_factory=ProcessLog)

    @property
    def is_canonical(self) -> bool:
        """True when no stage had to change the input."""
        return not self.changes

    def add_stage_change(self, stage: str, before: str, after: str, label: str) -> None:
        """Record a stage that changed the text."""
        self.changes.append(label)
        self.process_log.cleaning.append(
            ProcessEntry(
                entry_type="cleaning",
                field=stage,
                message=label,
                original_value=before,
                new_value=after,
                context={"operation_type": "normalization"},
            )
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "original": self.original,
            "normalized": self.normalized,
            "changes": list(self.changes),
        }


@dataclass(frozen=True)
class MatchOutcome:
    """Raw outcome of matching one address string against the index."""

    valid: bool
    matches: tuple[AddressRecord, ...] = ()
    suggestions: tuple[AddressRecord, ...] = ()


@dataclass
class AddressValidationResult:
    """Scored verdict for an address string."""

    valid: bool
    confidence: Confidence
    original_address: str
    normalized_address: str
    matched_records: list[AddressMatch] = field(default_factory=list)
    suggestions: list[AddressMatch] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "confidence": self.confidence.value,
            "original_address": self.original_address,
            "normalized_address": self.normalized_address,
            "matched_records": [m.to_dict() for m in self.matched_records],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "issues": list(self.issues),
        }
