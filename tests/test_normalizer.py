from __future__ import annotations

import pytest

from jp_address_utils.core import STAGES, NormalizeOptions, TextNormalizer, normalize
from jp_address_utils.core.normalizer import (
    convert_fullwidth_alnum,
    convert_halfwidth_kana,
    convert_kanji_numerals,
    unify_chome,
    unify_hyphens,
    unify_spaces,
)

WIDTH = "Converted fullwidth alphanumerics to halfwidth"
KANA = "Converted halfwidth katakana to fullwidth"
HYPHEN = "Unified hyphens and dashes"
SPACE = "Unified whitespace"
CHOME = "Unified chome/banchi/go notation"
KANJI = "Converted kanji numerals to digits"


class TestStageTransforms:
    """Each stage in isolation."""

    def test_fullwidth_digits_and_letters(self) -> None:
        assert convert_fullwidth_alnum("ＡＢＣ１２３ｘｙｚ") == "ABC123xyz"

    def test_fullwidth_leaves_kanji_alone(self) -> None:
        assert convert_fullwidth_alnum("東京都") == "東京都"

    def test_halfwidth_kana(self) -> None:
        assert convert_halfwidth_kana("ﾄｳｷｮｳﾄ") == "トウキョウト"

    def test_halfwidth_voicing_marks_stay_separate(self) -> None:
        assert convert_halfwidth_kana("ﾁﾖﾀﾞ") == "チヨタ゛"

    @pytest.mark.parametrize("dash", list("－ー―‐—−–"))
    def test_hyphen_variants(self, dash: str) -> None:
        assert unify_hyphens(f"1{dash}2") == "1-2"

    def test_spaces_collapse_and_trim(self) -> None:
        assert unify_spaces("　東京都　 千代田区  ") == "東京都 千代田区"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1丁目2番3号", "1-2-3"),
            ("1丁目2番地3号", "1-2-3"),
            ("1丁目2番3", "1-2-3"),
            ("1丁目2番", "1-2"),
            ("1丁目2番地", "1-2"),
            ("1丁目", "1丁目"),
            ("1 丁目", "1丁目"),
            ("2番3号", "2-3"),
            ("2番地3", "2-3"),
            ("5番", "5番地"),
            ("5番地", "5番地"),
            ("千代田1丁目2番3号先", "千代田1-2-3先"),
        ],
    )
    def test_chome_rules(self, text: str, expected: str) -> None:
        assert unify_chome(text) == expected

    def test_chome_rewrites_until_stable(self) -> None:
        assert unify_chome("1番2番3") == "1-2-3"

    def test_chome_keeps_surrounding_spaces(self) -> None:
        assert unify_chome("1番2 3番") == "1-2 3番地"

    def test_chome_ignores_kanji_numerals(self) -> None:
        assert unify_chome("一丁目") == "一丁目"

    def test_kanji_numerals_per_character(self) -> None:
        assert convert_kanji_numerals("三丁目十番") == "3丁目10番"


class TestNormalize:
    """The full pipeline."""

    def test_chome_example(self) -> None:
        result = normalize("1丁目2番3号")
        assert result.normalized == "1-2-3"
        assert CHOME in result.changes

    def test_fullwidth_address(self) -> None:
        result = normalize("東京都千代田区１−２−３")
        assert result.normalized == "東京都千代田区1-2-3"
        assert not any("０" <= ch <= "９" for ch in result.normalized)
        assert result.changes == [WIDTH, HYPHEN]

    def test_canonical_input_has_no_changes(self) -> None:
        result = normalize("東京都千代田区千代田")
        assert result.normalized == "東京都千代田区千代田"
        assert result.changes == []
        assert result.is_canonical

    def test_changes_follow_pipeline_order(self) -> None:
        result = normalize(" ﾄｳｷｮｳ　１丁目２番－３ ")
        assert result.changes == [WIDTH, KANA, HYPHEN, SPACE, CHOME]
        assert result.normalized == "トウキョウ 1-2-3"

    def test_kanji_conversion_is_off_by_default(self) -> None:
        result = normalize("三丁目")
        assert result.normalized == "三丁目"
        assert KANJI not in result.changes

    def test_kanji_conversion_runs_last(self) -> None:
        result = normalize("三丁目四番", NormalizeOptions(convert_kanji_numbers=True))
        # chome rules only see ASCII digits, so the counters survive
        assert result.normalized == "3丁目4番"
        assert result.changes == [KANJI]

    def test_disabled_stage_is_skipped(self) -> None:
        options = NormalizeOptions(convert_fullwidth_to_halfwidth=False)
        result = normalize("１２３", options)
        assert result.normalized == "１２３"
        assert result.changes == []

    def test_camel_case_options(self) -> None:
        options = NormalizeOptions.model_validate({"normalizeHyphens": False})
        assert options.normalize_hyphens is False
        assert normalize("1－2", options).normalized == "1－2"

    def test_original_is_kept(self) -> None:
        result = normalize("　東京都　")
        assert result.original == "　東京都　"
        assert result.to_dict() == {
            "original": "　東京都　",
            "normalized": "東京都",
            "changes": [SPACE],
        }

    def test_process_log_records_each_change(self) -> None:
        result = normalize("１丁目２番")
        entries = result.process_log.cleaning
        assert [e.field for e in entries] == ["width", "chome"]
        assert entries[0].original_value == "１丁目２番"
        assert entries[0].new_value == "1丁目2番"
        assert entries[1].new_value == "1-2"


class TestTextNormalizer:
    def test_default_stage_order(self) -> None:
        assert [s.name for s in TextNormalizer().stages] == [
            "width",
            "kana",
            "hyphen",
            "space",
            "chome",
            "kanji",
        ]

    def test_custom_stage_list(self) -> None:
        normalizer = TextNormalizer([s for s in STAGES if s.name == "space"])
        result = normalizer.normalize("１  ２")
        assert result.normalized == "１ ２"
        assert result.changes == [SPACE]

    def test_stage_apply_reports_label_only_on_change(self) -> None:
        stage = STAGES[0]
        assert stage.apply("abc") == ("abc", None)
        assert stage.apply("ａ") == ("a", WIDTH)
