import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse

from app.config import get_settings, reload_settings

reload_settings()
settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

from app.web.api import router as api_router
from app.web.spec import router as spec_router

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="Rechat Lead Capture",
    description="Demo front-end for the Rechat lead capture webhook",
    version="0.1.0",
)

app.include_router(api_router, prefix="/api", tags=["leads"])
app.include_router(spec_router, prefix="/api", tags=["spec"])


@app.get("/", include_in_schema=False)
async def index():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/health")
async def health():
    return {"status": "ok", "environment": settings.environment}
