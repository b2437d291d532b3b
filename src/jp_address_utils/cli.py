from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from jp_address_utils.config import DatasetConfig
from jp_address_utils.core.normalizer import NormalizeOptions
from jp_address_utils.data import JSONDatasetSource, fetch_ken_all
from jp_address_utils.models import DatasetLoadError
from jp_address_utils.service import JapanAddressService

app = typer.Typer(help="Japanese postal code and address lookup tools.")

LOAD_FAILURE_EXIT_CODE = 2


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _load_service(ctx: typer.Context) -> JapanAddressService:
    data_path: Optional[Path] = ctx.obj.get("data") if ctx.obj else None
    service = JapanAddressService(source=JSONDatasetSource(path=data_path))
    try:
        return service.load()
    except DatasetLoadError as exc:
        typer.echo(f"Dataset load failed: {exc}", err=True)
        raise typer.Exit(code=LOAD_FAILURE_EXIT_CODE) from exc


@app.callback()
def main_options(
    ctx: typer.Context,
    data: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--data",
        help="Path to ken_all.json (default: $JP_ADDRESS_DATA_PATH or ./data/ken_all.json).",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Log progress to stderr.",
    ),
) -> None:
    """Japanese postal code and address lookup tools."""
    ctx.obj = {"data": data}
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def fetch(
    output: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--output",
        "-o",
        help="Where to write ken_all.json (default: ./data/ken_all.json).",
    ),
    url: Optional[str] = typer.Option(  # noqa: B008
        None,
        "--url",
        help="Override the KEN_ALL archive URL.",
    ),
    dry_run: bool = typer.Option(  # noqa: B008
        False,
        "--dry-run",
        help="Download and convert, but do not write the file.",
    ),
) -> None:
    """Download the Japan Post KEN_ALL release and convert it to JSON."""
    config = DatasetConfig()
    if url:
        config.source_url = url

    try:
        summary = fetch_ken_all(output, config=config, dry_run=dry_run)
    except DatasetLoadError as exc:
        typer.echo(f"Fetch failed: {exc}", err=True)
        raise typer.Exit(code=LOAD_FAILURE_EXIT_CODE) from exc

    _echo_json(summary)


@app.command()
def lookup(ctx: typer.Context, postal_code: str) -> None:
    """Addresses for a postal code."""
    result = _load_service(ctx).postal_to_address(postal_code)
    _echo_json(result.to_dict())
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def search(ctx: typer.Context, address: str) -> None:
    """Postal codes for an address or address fragment."""
    result = _load_service(ctx).address_to_postal(address)
    _echo_json(result.to_dict())
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def normalize(
    text: str,
    kanji: bool = typer.Option(  # noqa: B008
        False,
        "--kanji",
        help="Also convert kanji numerals to digits.",
    ),
) -> None:
    """Normalize address notation (no dataset needed)."""
    service = JapanAddressService()
    result = service.normalize(text, NormalizeOptions(convert_kanji_numbers=kanji))
    _echo_json(result.to_dict())


@app.command()
def validate(ctx: typer.Context, address: str) -> None:
    """Validate an address and report a confidence level."""
    result = _load_service(ctx).validate(address)
    _echo_json(result.to_dict())
    if not result.valid:
        raise typer.Exit(code=1)


@app.command()
def stats(ctx: typer.Context) -> None:
    """Summary of the loaded dataset."""
    summary = _load_service(ctx).stats()
    _echo_json(summary.model_dump() if summary is not None else None)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
