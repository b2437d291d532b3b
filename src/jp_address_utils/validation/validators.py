from __future__ import annotations

from abstract_validation_base import (
    BaseValidator,
    CompositeValidator,
    ValidationResult,
    ValidatorPipelineBuilder,
)

from jp_address_utils.data.constants import find_prefecture
from jp_address_utils.models import NormalizationResult

NOTATION_ISSUE_PREFIX = "Notation variants detected: "
PREFECTURE_MISSING_MESSAGE = "Prefecture name not present"


class NotationValidator(BaseValidator[NormalizationResult]):
    """Reports notation variants the normalizer had to rewrite.

    The address is still usable; the issue tells the caller their spelling
    differs from the canonical form.
    """

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "notation"

    def validate(self, item: NormalizationResult) -> ValidationResult:
        """Add one issue listing every normalization label, if any."""
        result = ValidationResult(is_valid=True)
        if item.changes:
            result.add_error(
                field="address",
                message=NOTATION_ISSUE_PREFIX + ", ".join(item.changes),
                value=item.original,
            )
        return result


class PrefectureValidator(BaseValidator[NormalizationResult]):
    """Checks that one of the 47 prefecture names occurs in the address."""

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "prefecture"

    def validate(self, item: NormalizationResult) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        if find_prefecture(item.normalized) is None:
            result.add_error(
                field="prefecture",
                message=PREFECTURE_MISSING_MESSAGE,
                value=item.normalized,
            )
        return result


def create_default_checks() -> CompositeValidator[NormalizationResult]:
    """Create the pipeline of address text checks.

    Uses ValidatorPipelineBuilder so callers can build their own variant
    with extra checks in the same way.

    Returns:
        CompositeValidator running the notation and prefecture checks.
    """
    builder: ValidatorPipelineBuilder[NormalizationResult] = ValidatorPipelineBuilder(
        "address_checks"
    )
    builder.add(NotationValidator())
    builder.add(PrefectureValidator())
    return builder.build()
