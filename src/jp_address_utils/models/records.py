"""Reference dataset models.

AddressRecord mirrors one row of the Japan Post KEN_ALL release. Field
names are snake_case in Python and camelCase on the wire, matching the
layout of the persisted ken_all.json file.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from jp_address_utils.models.enums import UpdateCode, UpdateReason


class AddressRecord(BaseModel):
    """One administrative unit mapped to one postal code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    jis_code: str = Field(description="National local government code of the municipality")
    old_postal_code: str = Field(default="", description="Legacy 5-digit postal code")
    postal_code: str = Field(description="7-digit postal code without separators")
    prefecture_kana: str = ""
    city_kana: str = ""
    town_kana: str = ""
    prefecture: str
    city: str
    town: str
    has_multiple_zip: bool = Field(
        default=False, description="One town spans more than one postal code"
    )
    has_koaza_banchi: bool = Field(
        default=False, description="Banchi numbering restarts for each koaza"
    )
    has_chome: bool = Field(default=False, description="Town is subdivided into chome")
    has_multiple_town: bool = Field(
        default=False, description="One postal code covers more than one town"
    )
    update_code: UpdateCode = UpdateCode.UNCHANGED
    update_reason: UpdateReason = UpdateReason.NONE

    @field_validator("postal_code", mode="before")
    @classmethod
    def _strip_separators(cls, value: Any) -> Any:
        """Store the code without hyphens or whitespace."""
        from jp_address_utils.core.postal_code import PostalCodeNormalizer

        return PostalCodeNormalizer.clean(value) if isinstance(value, str) else value

    @property
    def composite_key(self) -> str:
        """Prefecture, city and town concatenated without a separator."""
        return f"{self.prefecture}{self.city}{self.town}"

    @property
    def full_address(self) -> str:
        """Display form of the address (same text as the composite key)."""
        return self.composite_key

    @property
    def formatted_postal_code(self) -> str:
        """Postal code in the conventional NNN-NNNN display form."""
        from jp_address_utils.core.postal_code import PostalCodeNormalizer

        return PostalCodeNormalizer.format(self.postal_code)

    @property
    def identity(self) -> str:
        """Key used to drop duplicate records from search results."""
        return f"{self.postal_code}-{self.prefecture}-{self.city}-{self.town}"


class Dataset(BaseModel):
    """The full reference corpus plus its release metadata."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",  # byPostalCode is rebuilt from records at load time
    )

    version: str = ""
    total_records: int = Field(default=0, ge=0)
    unique_postal_codes: int = Field(default=0, ge=0)
    records: tuple[AddressRecord, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _fill_counts(cls, data: Any) -> Any:
        """Compute the record counts when the source does not provide them."""
        if not isinstance(data, dict):
            return data

        records = data.get("records") or ()
        filled = dict(data)
        if "totalRecords" not in data and "total_records" not in data:
            filled["total_records"] = len(records)
        if "uniquePostalCodes" not in data and "unique_postal_codes" not in data:
            filled["unique_postal_codes"] = len({_postal_code_of(r) for r in records})
        return filled

    @classmethod
    def from_records(cls, records: list[AddressRecord], version: str = "") -> Dataset:
        """Build a dataset from already-parsed records, computing the counts."""
        return cls(version=version, records=tuple(records))


def _postal_code_of(record: Any) -> Any:
    if isinstance(record, AddressRecord):
        return record.postal_code
    if isinstance(record, dict):
        from jp_address_utils.core.postal_code import PostalCodeNormalizer

        code = record.get("postalCode", record.get("postal_code"))
        return PostalCodeNormalizer.clean(code) if isinstance(code, str) else code
    return None


class IndexStats(BaseModel):
    """Summary of a loaded dataset index."""

    model_config = ConfigDict(frozen=True)

    total_records: int
    unique_postal_codes: int
    version: str
