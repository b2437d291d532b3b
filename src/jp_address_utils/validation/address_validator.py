from __future__ import annotations

import logging
from typing import Optional

from abstract_validation_base import CompositeValidator

from jp_address_utils.core.normalizer import TextNormalizer
from jp_address_utils.matching import AddressMatcher
from jp_address_utils.models import (
    AddressMatch,
    AddressValidationResult,
    Confidence,
    IndexNotLoadedError,
    MatchOutcome,
    NormalizationResult,
)
from jp_address_utils.validation.validators import create_default_checks

logger = logging.getLogger(__name__)

EMPTY_ADDRESS_MESSAGE = "Address not provided"
NO_EXACT_MATCH_MESSAGE = "No exact match found"
NO_MATCH_MESSAGE = "No match in address database"

MAX_MATCHED_RECORDS = 10
MAX_SUGGESTIONS = 5


class AddressValidator:
    """Scores an address string against the reference dataset.

    validate() gives the raw match outcome for already-normalized text;
    assess() runs the full pipeline (normalize, check, match, classify).
    """

    def __init__(
        self,
        matcher: AddressMatcher,
        normalizer: Optional[TextNormalizer] = None,
        checks: Optional[CompositeValidator[NormalizationResult]] = None,
    ) -> None:
        self._matcher = matcher
        self._normalizer = normalizer or TextNormalizer()
        self._checks = checks or create_default_checks()

    def _require_ready(self) -> None:
        index = self._matcher.index
        if index.stats() is None:
            state = getattr(index, "state", "not_loaded")
            raise IndexNotLoadedError.for_state(getattr(state, "value", str(state)))

    def validate(self, address: str) -> MatchOutcome:
        """Match an address string.

        Args:
            address: Address text, normally already normalized.

        Returns:
            MatchOutcome; valid with matches, or invalid with suggestions.

        Raises:
            IndexNotLoadedError: If the index is not ready.
        """
        self._require_ready()
        matches = self._matcher.find_by_address(address)
        if matches:
            return MatchOutcome(valid=True, matches=matches)
        return MatchOutcome(valid=False, suggestions=self._matcher.suggest(address))

    def assess(self, address: Optional[str]) -> AddressValidationResult:
        """Validate and score an address string.

        Args:
            address: Raw address text as entered by a user.

        Returns:
            AddressValidationResult with confidence, matches and issues.

        Raises:
            IndexNotLoadedError: If the index is not ready.
        """
        self._require_ready()

        if not address or not address.strip():
            return AddressValidationResult(
                valid=False,
                confidence=Confidence.NONE,
                original_address=address or "",
                normalized_address="",
                issues=[EMPTY_ADDRESS_MESSAGE],
            )

        normalization = self._normalizer.normalize(address)
        check_result = self._checks.validate(normalization)
        issues = [error.message for error in check_result.errors]

        outcome = self.validate(normalization.normalized)
        if outcome.valid:
            confidence = Confidence.HIGH if len(outcome.matches) == 1 else Confidence.MEDIUM
        elif outcome.suggestions:
            confidence = Confidence.LOW
            issues.append(NO_EXACT_MATCH_MESSAGE)
        else:
            confidence = Confidence.NONE
            issues.append(NO_MATCH_MESSAGE)

        logger.debug(
            "Assessed %r: %s (%d matches, %d suggestions)",
            normalization.normalized,
            confidence.value,
            len(outcome.matches),
            len(outcome.suggestions),
        )

        return AddressValidationResult(
            valid=outcome.valid,
            confidence=confidence,
            original_address=address,
            normalized_address=normalization.normalized,
            matched_records=[
                AddressMatch.from_record(r) for r in outcome.matches[:MAX_MATCHED_RECORDS]
            ],
            suggestions=[AddressMatch.from_record(r) for r in outcome.suggestions[:MAX_SUGGESTIONS]],
            issues=issues,
        )
