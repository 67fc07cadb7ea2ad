"""
FastAPI application: read-only access to the collaborator site content.

Run as a script:
    python app/app.py

Or as a module:
    uvicorn app.app:app --reload

Endpoints:
    GET /health                 → {"status": "ok", "use_cases": int}
    GET /content                → the full site content
    GET /use-cases?q=...        → {"query", "total", "count", "use_cases": [...]}
    GET /use-cases/{slug}       → one use case (404 if unknown)

Content is validated once at start-up (lifespan). Logs each use-case query
and wall-clock response time to stdout and logs/app.log (rotating, 5 MB max,
3 backups).
"""

import asyncio
import logging
import logging.handlers
import os
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from content.loader import get_site
from content.models import Site, UseCase
from search.filter import UseCaseFilter

load_dotenv()

LOG_DIR  = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))


def _setup_logging() -> None:
    root = logging.getLogger()
    if any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers):
        return

    LOG_DIR.mkdir(exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    root.addHandler(stream)
    root.addHandler(rotating)

_setup_logging()
log = logging.getLogger("api")


# ---------------------------------------------------------------------------
# App + lifespan
# ---------------------------------------------------------------------------

_site: Site | None = None
_filter: UseCaseFilter | None = None


@asynccontextmanager
async def lifespan(_: FastAPI):
    global _site, _filter

    log.info("Loading site content…")
    _site = get_site()
    _filter = UseCaseFilter(_site.use_cases)
    log.info("  %d use cases ready.", len(_filter))

    yield  # server runs here


app = FastAPI(title="Institutions in Your Pocket", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str
    use_cases: int


class UseCaseListResponse(BaseModel):
    query: str
    total: int
    count: int
    use_cases: list[UseCase]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    assert _filter is not None, "Content not loaded"
    return HealthResponse(status="ok", use_cases=len(_filter))


@app.get("/content", response_model=Site)
def content() -> Site:
    assert _site is not None, "Content not loaded"
    return _site


@app.get("/use-cases", response_model=UseCaseListResponse)
def use_cases(q: str = "") -> UseCaseListResponse:
    assert _filter is not None, "Content not loaded"

    t0 = time.perf_counter()
    matches = _filter.query(q)
    elapsed = time.perf_counter() - t0

    log.info("query=%r  hits=%d/%d  %.4fs", q, len(matches), len(_filter), elapsed)
    return UseCaseListResponse(
        query=q,
        total=len(_filter),
        count=len(matches),
        use_cases=list(matches),
    )


@app.get("/use-cases/{slug}", response_model=UseCase)
def use_case(slug: str) -> UseCase:
    assert _filter is not None, "Content not loaded"

    for record in _filter.records:
        if record.slug == slug:
            return record
    raise HTTPException(status_code=404, detail=f"Unknown use case: {slug}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_server_task: asyncio.Task | None = None


def _launch_server() -> None:
    global _server_task

    config = uvicorn.Config(app, host=API_HOST, port=API_PORT, reload=False)
    server = uvicorn.Server(config)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        uvicorn.run(app, host=API_HOST, port=API_PORT, reload=False)
        return

    log.warning(
        "Detected an existing asyncio event loop; serving with create_task() instead of asyncio.run()."
    )
    _server_task = asyncio.create_task(server.serve())


if __name__ == "__main__":
    log.info("=== Institutions in Your Pocket — starting up ===")
    log.info("=== Launching server on http://%s:%d ===", API_HOST, API_PORT)
    _launch_server()
