from __future__ import annotations

import re

from jp_address_utils.core.postal_code import PostalCodeNormalizer
from jp_address_utils.data.constants import FRAGMENT_DELIMITERS, MIN_FRAGMENT_LENGTH
from jp_address_utils.models import AddressRecord
from jp_address_utils.protocols import AddressIndexProtocol

_FRAGMENT_SPLIT = re.compile(f"[{FRAGMENT_DELIMITERS}]")

SUGGESTION_LIMIT = 10
SUGGESTIONS_PER_KEY = 3


class AddressMatcher:
    """Query helpers over a loaded dataset index.

    Exact key and postal code lookups are constant time. The substring scan
    in find_by_address() and suggest() walk every distinct address key, so
    their cost grows with the dataset.
    """

    def __init__(self, index: AddressIndexProtocol) -> None:
        self._index = index

    @property
    def index(self) -> AddressIndexProtocol:
        return self._index

    def find_by_postal_code(self, postal_code: str) -> tuple[AddressRecord, ...]:
        """Records for a postal code written with or without a hyphen.

        Returns an empty tuple unless the cleaned input is exactly 7 digits.
        """
        digits = PostalCodeNormalizer.clean(postal_code)
        if not PostalCodeNormalizer.is_canonical(digits):
            return ()
        return tuple(self._index.lookup_by_postal_code(digits))

    def find_by_address(self, query: str) -> tuple[AddressRecord, ...]:
        """Records for an address query.

        An exact composite key returns its bucket as is. Otherwise every key
        that contains the query, or is contained in it, contributes its
        records in insertion order, with duplicates dropped.
        """
        if not query:
            return ()

        exact = self._index.lookup_by_address_key(query)
        if exact:
            return tuple(exact)

        seen: set[str] = set()
        results: list[AddressRecord] = []
        for key in self._index.all_keys():
            if query in key or key in query:
                for record in self._index.lookup_by_address_key(key):
                    if record.identity not in seen:
                        seen.add(record.identity)
                        results.append(record)
        return tuple(results)

    def suggest(
        self,
        text: str,
        limit: int = SUGGESTION_LIMIT,
        per_key: int = SUGGESTIONS_PER_KEY,
    ) -> tuple[AddressRecord, ...]:
        """Heuristic suggestions for text that matched nothing.

        This is not an address parser. The text is cut at administrative
        suffix characters (都道府県市区町村) and each fragment of at least two
        characters is looked for inside the address keys. Each matching key
        contributes up to per_key records; collection stops at limit.
        """
        fragments = [f for f in _FRAGMENT_SPLIT.split(text) if len(f) >= MIN_FRAGMENT_LENGTH]
        if not fragments or limit <= 0:
            return ()

        keys = self._index.all_keys()
        used_keys: set[str] = set()
        suggestions: list[AddressRecord] = []

        for fragment in fragments:
            for key in keys:
                if key in used_keys or fragment not in key:
                    continue
                used_keys.add(key)
                for record in self._index.lookup_by_address_key(key)[:per_key]:
                    suggestions.append(record)
                    if len(suggestions) >= limit:
                        return tuple(suggestions)
        return tuple(suggestions)
