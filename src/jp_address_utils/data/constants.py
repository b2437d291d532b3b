"""Centralized constants for Japanese prefectures and address splitting."""

from __future__ import annotations

# Display names of the 47 prefectures in JIS code order (01-47)
PREFECTURES: tuple[str, ...] = (
    "北海道",
    "青森県",
    "岩手県",
    "宮城県",
    "秋田県",
    "山形県",
    "福島県",
    "茨城県",
    "栃木県",
    "群馬県",
    "埼玉県",
    "千葉県",
    "東京都",
    "神奈川県",
    "新潟県",
    "富山県",
    "石川県",
    "福井県",
    "山梨県",
    "長野県",
    "岐阜県",
    "静岡県",
    "愛知県",
    "三重県",
    "滋賀県",
    "京都府",
    "大阪府",
    "兵庫県",
    "奈良県",
    "和歌山県",
    "鳥取県",
    "島根県",
    "岡山県",
    "広島県",
    "山口県",
    "徳島県",
    "香川県",
    "愛媛県",
    "高知県",
    "福岡県",
    "佐賀県",
    "長崎県",
    "熊本県",
    "大分県",
    "宮崎県",
    "鹿児島県",
    "沖縄県",
)

# JIS prefecture code ("01"-"47") -> display name
PREFECTURE_BY_CODE: dict[str, str] = {f"{i:02d}": name for i, name in enumerate(PREFECTURES, 1)}

# Administrative suffix characters used to cut an address into rough fragments
FRAGMENT_DELIMITERS: str = "都道府県市区町村"

# Minimum fragment length considered when generating suggestions
MIN_FRAGMENT_LENGTH = 2


def find_prefecture(text: str) -> str | None:
    """Return the first prefecture name contained in the text, if any."""
    for name in PREFECTURES:
        if name in text:
            return name
    return None
