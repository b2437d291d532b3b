"""FastAPI service for Japanese postal code lookup, normalization and validation."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from jp_address_utils.core.normalizer import NormalizeOptions
from jp_address_utils.core.postal_code import INVALID_FORMAT_MESSAGE
from jp_address_utils.models import DatasetLoadError, IndexNotLoadedError
from jp_address_utils.service import SHORT_QUERY_MESSAGE, JapanAddressService

logger = logging.getLogger(__name__)


class NormalizeRequest(BaseModel):
    text: str
    options: Optional[NormalizeOptions] = None


def create_app(service: Optional[JapanAddressService] = None) -> FastAPI:
    """Build the API around one service instance.

    The dataset is loaded during application startup. If that fails the
    app still starts; data endpoints answer 503 until a load succeeds.
    """
    svc = service or JapanAddressService()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            await svc.aload()
        except DatasetLoadError as exc:
            logger.warning("Starting without dataset: %s", exc)
        yield

    app = FastAPI(title="JP Address Utils API", version="0.1.0", lifespan=lifespan)
    app.state.service = svc

    @app.exception_handler(IndexNotLoadedError)
    async def _index_not_loaded(_: Request, exc: IndexNotLoadedError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict[str, Any]:
        stats = svc.stats()
        return {
            "status": "ok" if stats is not None else "degraded",
            "state": svc.state.value,
            "stats": stats.model_dump() if stats is not None else None,
        }

    @app.get("/postal/{postal_code}")
    def postal_to_address(postal_code: str) -> dict[str, Any]:
        """Addresses for a postal code (NNNNNNN or NNN-NNNN)."""
        result = svc.postal_to_address(postal_code)
        if not result.success:
            status = 400 if result.error == INVALID_FORMAT_MESSAGE else 404
            raise HTTPException(status_code=status, detail=result.error)
        return result.to_dict()

    @app.get("/search")
    def address_to_postal(address: str = Query(...)) -> dict[str, Any]:
        """Postal codes for an address or address fragment."""
        result = svc.address_to_postal(address)
        if not result.success:
            status = 400 if result.error == SHORT_QUERY_MESSAGE else 404
            raise HTTPException(status_code=status, detail=result.error)
        return result.to_dict()

    @app.post("/normalize")
    def normalize(request: NormalizeRequest) -> dict[str, Any]:
        return svc.normalize(request.text, request.options).to_dict()

    @app.get("/validate")
    def validate(address: str = Query("")) -> dict[str, Any]:
        return svc.validate(address).to_dict()

    return app


app = create_app()

# To run: uvicorn jp_address_utils.api:app --host 0.0.0.0 --port 8000
