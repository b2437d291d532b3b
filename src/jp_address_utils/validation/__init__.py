"""Address validation and confidence scoring.

This module provides the address text checks and the validator that
combines normalization, matching and classification.
"""

from abstract_validation_base import (
    BaseValidator,
    CompositeValidator,
    ValidatorPipelineBuilder,
)

from jp_address_utils.validation.address_validator import (
    EMPTY_ADDRESS_MESSAGE,
    MAX_MATCHED_RECORDS,
    MAX_SUGGESTIONS,
    NO_EXACT_MATCH_MESSAGE,
    NO_MATCH_MESSAGE,
    AddressValidator,
)
from jp_address_utils.validation.validators import (
    NOTATION_ISSUE_PREFIX,
    PREFECTURE_MISSING_MESSAGE,
    NotationValidator,
    PrefectureValidator,
    create_default_checks,
)

__all__ = [
    "BaseValidator",
    "CompositeValidator",
    "ValidatorPipelineBuilder",
    "AddressValidator",
    "NotationValidator",
    "PrefectureValidator",
    "create_default_checks",
    # Messages
    "EMPTY_ADDRESS_MESSAGE",
    "NO_EXACT_MATCH_MESSAGE",
    "NO_MATCH_MESSAGE",
    "NOTATION_ISSUE_PREFIX",
    "PREFECTURE_MISSING_MESSAGE",
    "MAX_MATCHED_RECORDS",
    "MAX_SUGGESTIONS",
]
