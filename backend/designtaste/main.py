import logging
import sqlite3
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from designtaste.config import settings
from designtaste.database import SessionLocal, init_db
from designtaste.routers import ai, elements, quick_fix
from designtaste.services.processing_worker import ProcessingWorker

logger = logging.getLogger("designtaste")

VERSION = "0.2.0"


def _configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    _configure_logging()
    logger.info("DesignTaste backend starting | db=%s", settings.db_path)
    init_db()

    conn = sqlite3.connect(str(settings.db_path))
    result = conn.execute("PRAGMA integrity_check").fetchone()
    conn.close()
    if result and result[0] == "ok":
        logger.info("Database integrity check passed.")
    else:
        logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)

    worker = ProcessingWorker(SessionLocal)
    worker.start()
    app.state.worker = worker
    yield
    await worker.stop()
    logger.info(
        "DesignTaste backend shutting down | processed=%d failed=%d pending=%d",
        worker.processed,
        worker.failed,
        worker.pending,
    )


app = FastAPI(
    title="DesignTaste",
    description="Element capture analysis, design inspiration and AI code generation",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    # Local dashboard dev servers plus browser extension origins.
    allow_origins=[
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ],
    allow_origin_regex=r"(moz-extension|chrome-extension)://[a-zA-Z0-9-]+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(elements.router, prefix=settings.api_prefix)
app.include_router(ai.router, prefix=settings.api_prefix)
app.include_router(quick_fix.router, prefix=settings.api_prefix)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}


def run():
    uvicorn.run("designtaste.main:app", host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
