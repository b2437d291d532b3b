"""Stateful property-based tests using Hypothesis for workflow testing.

This module contains stateful tests using Hypothesis's RuleBasedStateMachine
to test multi-step workflows: the dataset index lifecycle and repeated
service requests against one loaded dataset.
"""

from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import HealthCheck, settings
from hypothesis.stateful import Bundle, RuleBasedStateMachine, invariant, rule

from jp_address_utils import (
    Dataset,
    DatasetIndex,
    DatasetLoadError,
    IndexNotLoadedError,
    IndexState,
    JapanAddressService,
)
from jp_address_utils.data import InMemoryDatasetSource
from tests.sample_data import SAMPLE_RECORDS
from tests.strategies import TOWNS, address_strategy

SAMPLE_CODES = sorted({r.postal_code for r in SAMPLE_RECORDS})


class FlakySource:
    """Dataset source that fails while `broken` is set."""

    def __init__(self) -> None:
        self.broken = False
        self.calls = 0

    def load_dataset(self) -> Dataset:
        self.calls += 1
        if self.broken:
            raise OSError("disk unavailable")
        return Dataset.from_records(SAMPLE_RECORDS, version="flaky")


# =============================================================================
# DatasetIndex Lifecycle State Machine
# =============================================================================


class DatasetIndexStateMachine(RuleBasedStateMachine):
    """State machine for the index load lifecycle.

    Loads may fail and be retried; once an index is ready it never goes
    back, and no further load reaches the source.
    """

    def __init__(self) -> None:
        super().__init__()
        self.source = FlakySource()
        self.index = DatasetIndex()
        self.expected_state = IndexState.NOT_LOADED
        self.calls_when_ready: int | None = None

    @rule(broken=st.booleans())
    def toggle_source(self, broken: bool) -> None:
        self.source.broken = broken

    @rule()
    def load(self) -> None:
        if self.expected_state is IndexState.READY:
            self.index.load(self.source)
            return

        if self.source.broken:
            with pytest.raises(DatasetLoadError):
                self.index.load(self.source)
            self.expected_state = IndexState.FAILED
        else:
            self.index.load(self.source)
            self.expected_state = IndexState.READY
            self.calls_when_ready = self.source.calls

    @rule(code=st.sampled_from(SAMPLE_CODES))
    def lookup(self, code: str) -> None:
        if self.expected_state is IndexState.READY:
            assert self.index.lookup_by_postal_code(code)
        else:
            with pytest.raises(IndexNotLoadedError):
                self.index.lookup_by_postal_code(code)

    @invariant()
    def state_matches_model(self) -> None:
        assert self.index.state is self.expected_state
        assert self.index.is_loaded == (self.expected_state is IndexState.READY)

    @invariant()
    def stats_only_when_ready(self) -> None:
        stats = self.index.stats()
        if self.expected_state is IndexState.READY:
            assert stats is not None
            assert stats.total_records == len(SAMPLE_RECORDS)
        else:
            assert stats is None

    @invariant()
    def ready_index_never_reloads(self) -> None:
        if self.calls_when_ready is not None:
            assert self.source.calls == self.calls_when_ready


# Create pytest test case
TestDatasetIndexLifecycle = DatasetIndexStateMachine.TestCase
TestDatasetIndexLifecycle.settings = settings(
    max_examples=50,
    stateful_step_count=20,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)


# =============================================================================
# JapanAddressService Request State Machine
# =============================================================================


class AddressServiceStateMachine(RuleBasedStateMachine):
    """State machine for request sequences against one loaded service.

    Requests never change the loaded data, so the same request always
    gets the same answer.
    """

    def __init__(self) -> None:
        super().__init__()
        self.service = JapanAddressService(
            source=InMemoryDatasetSource(SAMPLE_RECORDS, version="stateful")
        ).load()
        self.seen: dict[str, list[str]] = {}

    addresses = Bundle("addresses")

    @rule(target=addresses, address=st.one_of(address_strategy(), st.sampled_from(TOWNS)))
    def add_address(self, address: str) -> str:
        return address

    @rule(target=addresses, code=st.sampled_from(SAMPLE_CODES))
    def add_known_address(self, code: str) -> str:
        return self.service.postal_to_address(code).addresses[0].full_address

    @rule(address=addresses)
    def search_is_repeatable(self, address: str) -> None:
        result = self.service.address_to_postal(address)
        codes = [r.postal_code for r in result.results]
        if address in self.seen:
            assert codes == self.seen[address]
        self.seen[address] = codes
        assert len(codes) <= 20

    @rule(address=addresses)
    def validation_agrees_with_search(self, address: str) -> None:
        verdict = self.service.validate(address)
        if verdict.confidence.value in {"high", "medium"}:
            assert verdict.valid
            assert verdict.matched_records
            assert verdict.suggestions == []
        else:
            assert not verdict.valid
            assert verdict.matched_records == []

    @rule(code=st.sampled_from(SAMPLE_CODES))
    def lookup_roundtrip(self, code: str) -> None:
        """Every address found for a code leads back to that code."""
        result = self.service.postal_to_address(code)
        assert result.success
        for match in result.addresses:
            search = self.service.address_to_postal(match.full_address)
            assert result.postal_code in [r.postal_code for r in search.results]

    @invariant()
    def service_stays_ready(self) -> None:
        assert self.service.state is IndexState.READY
        stats = self.service.stats()
        assert stats is not None
        assert stats.version == "stateful"


# Create pytest test case
TestAddressService = AddressServiceStateMachine.TestCase
TestAddressService.settings = settings(
    max_examples=30,
    stateful_step_count=15,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
