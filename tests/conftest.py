"""Shared pytest fixtures and Hypothesis configuration.

This module provides pytest fixtures and configures Hypothesis profiles
for the test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import Verbosity, settings

from jp_address_utils import AddressRecord, Dataset, DatasetIndex, JapanAddressService
from jp_address_utils.data import InMemoryDatasetSource, build_dataset_payload, write_dataset_json
from tests.sample_data import SAMPLE_RECORDS

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture
def sample_records() -> list[AddressRecord]:
    return list(SAMPLE_RECORDS)


@pytest.fixture
def sample_dataset(sample_records: list[AddressRecord]) -> Dataset:
    return Dataset.from_records(sample_records, version="2024-06-28T00:00:00.000Z")


@pytest.fixture
def loaded_index(sample_dataset: Dataset) -> DatasetIndex:
    return DatasetIndex().load(sample_dataset)


@pytest.fixture
def service(sample_records: list[AddressRecord]) -> JapanAddressService:
    """Service loaded with the sample records."""
    source = InMemoryDatasetSource(sample_records, version="test")
    return JapanAddressService(source=source).load()


@pytest.fixture
def dataset_json(tmp_path: Path, sample_records: list[AddressRecord]) -> Path:
    """ken_all.json written from the sample records."""
    payload = build_dataset_payload(sample_records, version="2024-06-28T00:00:00.000Z")
    return write_dataset_json(payload, tmp_path / "data" / "ken_all.json")
