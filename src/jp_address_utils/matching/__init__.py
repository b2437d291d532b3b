"""Address and postal code matching over a loaded index."""

from jp_address_utils.matching.matcher import (
    SUGGESTION_LIMIT,
    SUGGESTIONS_PER_KEY,
    AddressMatcher,
)

__all__ = ["AddressMatcher", "SUGGESTION_LIMIT", "SUGGESTIONS_PER_KEY"]
