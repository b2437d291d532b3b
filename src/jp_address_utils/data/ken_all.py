"""Japan Post KEN_ALL release: download, decode and convert to ken_all.json.

The release is a zip archive holding one Shift_JIS (cp932) CSV file with
15 unnamed columns per row. This module turns it into the JSON layout that
JSONDatasetSource reads.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import zipfile
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

import httpx

from jp_address_utils.config import DatasetConfig
from jp_address_utils.models import PACKAGE_NAME, AddressRecord, DatasetLoadError

logger = logging.getLogger(__name__)

# Column order of the KEN_ALL CSV
KEN_ALL_COLUMNS: tuple[str, ...] = (
    "jis_code",
    "old_postal_code",
    "postal_code",
    "prefecture_kana",
    "city_kana",
    "town_kana",
    "prefecture",
    "city",
    "town",
    "has_multiple_zip",
    "has_koaza_banchi",
    "has_chome",
    "has_multiple_town",
    "update_code",
    "update_reason",
)

_FLAG_COLUMNS = frozenset({"has_multiple_zip", "has_koaza_banchi", "has_chome", "has_multiple_town"})
_INT_COLUMNS = frozenset({"update_code", "update_reason"})

KEN_ALL_ENCODING = "cp932"


def parse_ken_all_rows(rows: Iterable[Sequence[str]]) -> list[AddressRecord]:
    """Convert raw CSV rows into records.

    Rows with fewer than 15 fields are skipped. Flag columns are true only
    for the value "1".
    """
    records: list[AddressRecord] = []
    skipped = 0
    width = len(KEN_ALL_COLUMNS)

    for row in rows:
        if len(row) < width:
            skipped += 1
            continue

        values: dict[str, Any] = {}
        for column, raw in zip(KEN_ALL_COLUMNS, row):
            if column in _FLAG_COLUMNS:
                values[column] = raw == "1"
            elif column in _INT_COLUMNS:
                values[column] = int(raw)
            else:
                values[column] = raw
        records.append(AddressRecord(**values))

    if skipped:
        logger.debug("Skipped %d short KEN_ALL rows", skipped)
    return records


def read_ken_all_csv(data: bytes, encoding: str = KEN_ALL_ENCODING) -> list[list[str]]:
    """Decode the raw CSV bytes and split them into rows (quoted fields honoured)."""
    text = data.decode(encoding)
    return [row for row in csv.reader(io.StringIO(text)) if row]


def extract_ken_all_csv(archive: bytes) -> bytes:
    """Return the bytes of the first .csv member of a zip archive.

    Raises:
        DatasetLoadError: If the archive holds no CSV file.
    """
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        for member in zf.namelist():
            if member.lower().endswith(".csv"):
                logger.debug("Extracting %s", member)
                return zf.read(member)

    raise DatasetLoadError(
        "dataset_archive",
        "CSV file not found in archive",
        {"package": PACKAGE_NAME},
    )


def download_ken_all(
    url: Optional[str] = None,
    *,
    config: Optional[DatasetConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> bytes:
    """Download the KEN_ALL zip archive.

    Args:
        url: Archive URL. Defaults to the configured source URL.
        config: Dataset configuration (source URL and timeout).
        transport: Optional httpx transport, mainly for tests.

    Returns:
        The archive bytes.

    Raises:
        DatasetLoadError: On connection errors or non-200 responses.
    """
    config = config or DatasetConfig()
    target = url or config.source_url
    logger.info("Downloading %s", target)

    try:
        with httpx.Client(
            timeout=config.http_timeout,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = client.get(target)
    except httpx.HTTPError as exc:
        raise DatasetLoadError.wrap(exc, url=target) from exc

    if response.status_code != 200:
        raise DatasetLoadError(
            "dataset_download",
            "Download failed with HTTP {status}",
            {"package": PACKAGE_NAME, "status": response.status_code, "url": target},
        )

    logger.info("Downloaded %d bytes", len(response.content))
    return response.content


def build_dataset_payload(
    records: Sequence[AddressRecord],
    version: Optional[str] = None,
) -> dict[str, Any]:
    """Build the ken_all.json document for a list of records."""
    serialized = [r.model_dump(by_alias=True, mode="json") for r in records]

    by_postal_code: dict[str, list[dict[str, Any]]] = {}
    for item in serialized:
        by_postal_code.setdefault(item["postalCode"], []).append(item)

    if version is None:
        version = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    return {
        "version": version,
        "totalRecords": len(serialized),
        "uniquePostalCodes": len(by_postal_code),
        "records": serialized,
        "byPostalCode": by_postal_code,
    }


def write_dataset_json(payload: dict[str, Any], path: Union[str, Path]) -> Path:
    """Write the dataset document as UTF-8 JSON, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Saved %d records to %s", payload.get("totalRecords", 0), target)
    return target


def fetch_ken_all(
    output: Optional[Union[str, Path]] = None,
    *,
    config: Optional[DatasetConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Download, decode and convert the release into ken_all.json.

    Args:
        output: Destination file. Defaults to the configured output path.
        config: Dataset configuration.
        transport: Optional httpx transport, mainly for tests.
        dry_run: Build the payload but do not write it.

    Returns:
        Summary with the record counts and the output path.

    Raises:
        DatasetLoadError: If any step fails.
    """
    config = config or DatasetConfig()
    destination = Path(output) if output is not None else config.default_output_path

    archive = download_ken_all(config=config, transport=transport)
    try:
        rows = read_ken_all_csv(extract_ken_all_csv(archive))
        records = parse_ken_all_rows(rows)
    except DatasetLoadError:
        raise
    except (zipfile.BadZipFile, UnicodeDecodeError, ValueError) as exc:
        raise DatasetLoadError.wrap(exc, url=config.source_url) from exc

    payload = build_dataset_payload(records)
    if not dry_run:
        write_dataset_json(payload, destination)

    return {
        "version": payload["version"],
        "total_records": payload["totalRecords"],
        "unique_postal_codes": payload["uniquePostalCodes"],
        "output": str(destination),
        "written": not dry_run,
    }
