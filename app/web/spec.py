"""Serves the OpenAPI document describing the Rechat lead endpoints."""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from app.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

PACKAGED_SPEC = Path(__file__).resolve().parent.parent / "static" / "openapi.yaml"


def _spec_path() -> Path:
    configured = get_settings().openapi_spec_path
    return Path(configured) if configured else PACKAGED_SPEC


@router.get("/spec")
async def openapi_spec():
    path = _spec_path()
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to read OpenAPI spec at %s: %s", path, e)
        return JSONResponse(status_code=500, content={"error": "Failed to load OpenAPI specification"})

    return Response(
        content=contents,
        media_type="application/x-yaml",
        headers={"Access-Control-Allow-Origin": "*"},
    )
