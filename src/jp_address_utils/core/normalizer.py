"""Japanese address text normalization.

The pipeline is an ordered list of independent stages. Each stage is a pure
``str -> str`` transform tied to one option flag and one stable change label;
running the pipeline is a fold over the enabled stages.

Order is fixed: width -> kana -> hyphen -> space -> chome -> kanji numerals.
With ``convert_kanji_numbers`` off, the output is a fixed point of the
pipeline.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from jp_address_utils.core.char_tables import (
    FULLWIDTH_TO_HALFWIDTH,
    HALFWIDTH_KANA_TO_FULLWIDTH,
    HYPHEN_VARIANTS,
    KANJI_TO_ARABIC,
)
from jp_address_utils.models.results import NormalizationResult


class NormalizeOptions(BaseModel):
    """Switches for the normalization stages."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    convert_fullwidth_to_halfwidth: bool = True
    convert_halfwidth_kana_to_fullwidth: bool = True
    normalize_hyphens: bool = True
    normalize_spaces: bool = True
    normalize_chome: bool = True
    # Off by default so that names such as 一丁目 or 二番町 survive
    convert_kanji_numbers: bool = False


DEFAULT_OPTIONS = NormalizeOptions()


# -----------------------------------------------------------------------------
# Stage transforms
# -----------------------------------------------------------------------------

_WIDTH_TABLE = str.maketrans(FULLWIDTH_TO_HALFWIDTH)
_KANA_TABLE = str.maketrans(HALFWIDTH_KANA_TO_FULLWIDTH)
_KANJI_TABLE = str.maketrans(KANJI_TO_ARABIC)
_HYPHENS = re.compile(f"[{re.escape(HYPHEN_VARIANTS)}]")
_WHITESPACE = re.compile(r"\s+")

# Longest patterns first; each substitution runs over the whole string.
# Matches never start or end on whitespace.
_CHOME_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"([0-9]+)\s*丁目\s*([0-9]+)\s*番地?\s*([0-9]+)(?:\s*号)?"), r"\1-\2-\3"),
    (re.compile(r"([0-9]+)\s*丁目\s*([0-9]+)\s*番地?"), r"\1-\2"),
    (re.compile(r"([0-9]+)\s*丁目"), r"\1丁目"),
    (re.compile(r"([0-9]+)\s*番地?\s*([0-9]+)(?:\s*号)?"), r"\1-\2"),
    (re.compile(r"([0-9]+)\s*番地?"), r"\1番地"),
]


def convert_fullwidth_alnum(text: str) -> str:
    """Map fullwidth digits and Latin letters to ASCII."""
    return text.translate(_WIDTH_TABLE)


def convert_halfwidth_kana(text: str) -> str:
    """Map halfwidth katakana (and voicing marks) to fullwidth katakana."""
    return text.translate(_KANA_TABLE)


def unify_hyphens(text: str) -> str:
    return _HYPHENS.sub("-", text)


def unify_spaces(text: str) -> str:
    """Collapse whitespace runs (fullwidth space included) and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def unify_chome(text: str) -> str:
    """Rewrite 丁目/番地/号 counters into hyphen-joined numbers.

    1丁目2番3号 -> 1-2-3, 1丁目2番 -> 1-2, 2番3号 -> 2-3, 5番 -> 5番地.

    A rewrite can expose a new match ("1番2番3" -> "1-2番地3"), so the
    rules are reapplied until the text stops changing. Every non-identity
    rewrite removes a counter or adds the one missing 地, so this ends.
    """
    while True:
        rewritten = text
        for pattern, replacement in _CHOME_RULES:
            rewritten = pattern.sub(replacement, rewritten)
        if rewritten == text:
            return text
        text = rewritten


def convert_kanji_numerals(text: str) -> str:
    """Replace each kanji numeral character with its digits (十 -> 10)."""
    return text.translate(_KANJI_TABLE)


@dataclass(frozen=True)
class NormalizationStage:
    """One pipeline step: the option that enables it, its label and transform."""

    name: str
    option: str
    label: str
    transform: Callable[[str], str]

    def enabled(self, options: NormalizeOptions) -> bool:
        return bool(getattr(options, self.option))

    def apply(self, text: str) -> tuple[str, str | None]:
        """Run the transform; return the output and the label if it changed anything."""
        result = self.transform(text)
        return result, (self.label if result != text else None)


STAGES: tuple[NormalizationStage, ...] = (
    NormalizationStage(
        "width",
        "convert_fullwidth_to_halfwidth",
        "Converted fullwidth alphanumerics to halfwidth",
        convert_fullwidth_alnum,
    ),
    NormalizationStage(
        "kana",
        "convert_halfwidth_kana_to_fullwidth",
        "Converted halfwidth katakana to fullwidth",
        convert_halfwidth_kana,
    ),
    NormalizationStage("hyphen", "normalize_hyphens", "Unified hyphens and dashes", unify_hyphens),
    NormalizationStage("space", "normalize_spaces", "Unified whitespace", unify_spaces),
    NormalizationStage(
        "chome", "normalize_chome", "Unified chome/banchi/go notation", unify_chome
    ),
    NormalizationStage(
        "kanji",
        "convert_kanji_numbers",
        "Converted kanji numerals to digits",
        convert_kanji_numerals,
    ),
)


class TextNormalizer:
    """Runs the normalization stages in order.

    Example:
        >>> TextNormalizer().normalize("東京都千代田区１丁目２番３号").normalized
        '東京都千代田区1-2-3'
    """

    def __init__(self, stages: Sequence[NormalizationStage] = STAGES) -> None:
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[NormalizationStage, ...]:
        return self._stages

    def normalize(
        self,
        text: str,
        options: NormalizeOptions | None = None,
    ) -> NormalizationResult:
        """Normalize an address string.

        Args:
            text: Raw address text.
            options: Stage switches. Defaults to DEFAULT_OPTIONS.

        Returns:
            NormalizationResult with the output text and the labels of the
            stages that changed it.
        """
        opts = options or DEFAULT_OPTIONS
        result = NormalizationResult(original=text, normalized=text)

        current = text
        for stage in self._stages:
            if not stage.enabled(opts):
                continue
            output, label = stage.apply(current)
            if label is not None:
                result.add_stage_change(stage.name, current, output, label)
            current = output

        result.normalized = current
        return result


_default_normalizer = TextNormalizer()


def normalize(text: str, options: NormalizeOptions | None = None) -> NormalizationResult:
    """Normalize with the default stage list."""
    return _default_normalizer.normalize(text, options)
