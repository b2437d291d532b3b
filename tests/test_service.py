from __future__ import annotations

import asyncio
from pathlib import Path

import pandas as pd
import pytest

from jp_address_utils import (
    DatasetLoadError,
    IndexNotLoadedError,
    IndexState,
    JapanAddressService,
    JSONDatasetSource,
    NormalizeOptions,
)
from jp_address_utils.config import DatasetConfig
from jp_address_utils.data import InMemoryDatasetSource
from tests.sample_data import make_record


class TestPostalToAddress:
    @pytest.mark.parametrize("code", ["1000001", "100-0001"])
    def test_found(self, service: JapanAddressService, code: str) -> None:
        result = service.postal_to_address(code)
        assert result.success
        assert result.postal_code == "100-0001"
        assert result.error is None
        address = result.addresses[0]
        assert address.full_address == "東京都千代田区千代田"
        assert address.town_kana == "チヨダ"

    def test_malformed(self, service: JapanAddressService) -> None:
        result = service.postal_to_address("100-000")
        assert not result.success
        assert result.postal_code == "100-000"
        assert result.error == "Invalid postal code format: expected 7 digits"

    def test_not_found(self, service: JapanAddressService) -> None:
        result = service.postal_to_address("999-9999")
        assert not result.success
        assert result.error == "No address found for postal code 999-9999"

    def test_hyphenated_dataset_codes(self) -> None:
        records = [
            make_record("100-0001", "東京都", "千代田区", "千代田"),
            make_record("1000001", "東京都", "千代田区", "千代田"),
        ]
        service = JapanAddressService(source=InMemoryDatasetSource(records)).load()

        lookup = service.postal_to_address("1000001")
        assert [a.postal_code for a in lookup.addresses] == ["100-0001", "100-0001"]

        search = service.address_to_postal("千代田区千代")
        assert [r.postal_code for r in search.results] == ["100-0001"]

    def test_to_dict(self, service: JapanAddressService) -> None:
        data = service.postal_to_address("0600042").to_dict()
        assert data["success"] is True
        assert data["postal_code"] == "060-0042"
        assert data["addresses"][0]["town"] == "大通西（１～１９丁目）"


class TestAddressToPostal:
    def test_found(self, service: JapanAddressService) -> None:
        result = service.address_to_postal("千代田区")
        assert result.success
        assert result.query == "千代田区"
        assert [r.postal_code for r in result.results] == ["100-0001", "100-0002", "101-0021"]

    def test_query_is_trimmed(self, service: JapanAddressService) -> None:
        result = service.address_to_postal("  梅田 ")
        assert result.success
        assert result.query == "  梅田 "
        assert result.results[0].postal_code == "530-0001"

    @pytest.mark.parametrize("query", ["", " ", "東", " 東 "])
    def test_short_query(self, service: JapanAddressService, query: str) -> None:
        result = service.address_to_postal(query)
        assert not result.success
        assert result.error == "Address query must be at least 2 characters"

    def test_not_found(self, service: JapanAddressService) -> None:
        result = service.address_to_postal("東京都港区")
        assert not result.success
        assert result.error == "No address matches '東京都港区'"

    def test_results_are_capped(self) -> None:
        records = [make_record(f"90{n:05d}", "沖縄県", "那覇市", f"町{n}") for n in range(25)]
        service = JapanAddressService(source=InMemoryDatasetSource(records)).load()

        result = service.address_to_postal("那覇市")
        assert result.success
        assert len(result.results) == 20


class TestNormalizeAndValidate:
    def test_normalize_needs_no_dataset(self) -> None:
        service = JapanAddressService(source=InMemoryDatasetSource())
        assert service.normalize("１丁目２番３号").normalized == "1-2-3"

    def test_normalize_overrides(self, service: JapanAddressService) -> None:
        assert service.normalize("三丁目", convert_kanji_numbers=True).normalized == "3丁目"
        assert service.normalize("三丁目", convertKanjiNumbers=True).normalized == "3丁目"

    def test_normalize_overrides_extend_options(self, service: JapanAddressService) -> None:
        options = NormalizeOptions(normalize_spaces=False)
        result = service.normalize(" 三 ", options, convert_kanji_numbers=True)
        assert result.normalized == " 3 "

    def test_validate(self, service: JapanAddressService) -> None:
        result = service.validate("東京都千代田区千代田")
        assert result.valid
        assert result.confidence.value in {"high", "medium"}


class TestLifecycle:
    def test_operations_require_load(self) -> None:
        service = JapanAddressService(source=InMemoryDatasetSource())
        assert service.state is IndexState.NOT_LOADED
        assert service.stats() is None
        with pytest.raises(IndexNotLoadedError):
            service.postal_to_address("100-0001")
        with pytest.raises(IndexNotLoadedError):
            service.address_to_postal("千代田区")
        with pytest.raises(IndexNotLoadedError):
            service.validate("東京都")

    def test_ensure_loaded(self, sample_records) -> None:
        service = JapanAddressService(source=InMemoryDatasetSource(sample_records))
        service.ensure_loaded()
        service.ensure_loaded()
        assert service.state is IndexState.READY

    def test_aload(self, sample_records) -> None:
        service = JapanAddressService(source=InMemoryDatasetSource(sample_records))
        asyncio.run(service.aload())
        assert service.postal_to_address("1000001").success

    def test_default_source_reads_config(self, dataset_json: Path) -> None:
        config = DatasetConfig(data_path=None, data_dir=dataset_json.parent)
        service = JapanAddressService(config=config)
        assert isinstance(service.source, JSONDatasetSource)
        service.load()
        stats = service.stats()
        assert stats is not None
        assert stats.total_records == 8

    def test_missing_dataset(self, tmp_path: Path) -> None:
        config = DatasetConfig(data_path=None, data_dir=tmp_path)
        service = JapanAddressService(config=config)
        with pytest.raises(DatasetLoadError):
            service.load()
        assert service.state is IndexState.FAILED


class TestValidateDataFrame:
    def test_adds_columns(self, service: JapanAddressService) -> None:
        df = pd.DataFrame({"address": ["東京都千代田区千代田", "京都府京都市下京区東塩小路町", None]})
        result = service.validate_dataframe(df, "address", prefix="jp_")

        assert "jp_valid" not in df.columns
        assert result["jp_confidence"].tolist() == ["high", "medium", "none"]
        assert result["jp_valid"].tolist() == [True, True, False]
        assert result["jp_postal_code"].tolist() == ["100-0001", "600-8216", None]
        assert result["jp_issues"].iloc[2] == "Address not provided"

    def test_inplace(self, service: JapanAddressService) -> None:
        df = pd.DataFrame({"address": ["沖縄県那覇市"]})
        service.validate_dataframe(df, "address", inplace=True)
        assert df["confidence"].iloc[0] == "none"
