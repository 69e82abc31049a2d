"""
main.py – HTTP front end.

    uvicorn txflag.main:app

POST /analyze takes a JSON dataset upload and returns the IDs each pass
flagged; GET /health reports liveness and the upload limit.
"""
from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import (
    CORS_ORIGINS,
    LARGE_FIRST_CONTACT_MIN_VALUE,
    MAX_FILE_SIZE_BYTES,
    MAX_FILE_SIZE_MB,
    RAPID_REPEAT_WINDOW_MINUTES,
    VERY_LARGE_TX_MIN_VALUE,
)
from .formatter import format_output
from .parser import parse_json
from .pipeline import run_all

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s │ %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
log = logging.getLogger(__name__)


async def _read_upload(file: UploadFile) -> bytes:
    if not (file.filename or "").lower().endswith(".json"):
        raise HTTPException(status_code=400, detail="Only JSON files are accepted.")

    file_bytes = await file.read()
    if len(file_bytes) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {MAX_FILE_SIZE_MB} MB.",
        )
    return file_bytes


def create_app() -> FastAPI:
    api = FastAPI(
        title="txflag",
        description="Flag suspicious transactions with simple, tunable heuristics",
        version=__version__,
    )
    api.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @api.middleware("http")
    async def tag_request(request: Request, call_next):
        # callers may supply their own ID to correlate with upstream logs
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        log.info("%s %s -> %d [%s]", request.method, request.url.path,
                 response.status_code, request_id)
        return response

    @api.get("/health")
    def health():
        return {
            "status": "healthy",
            "version": __version__,
            "max_file_size_mb": MAX_FILE_SIZE_MB,
        }

    @api.post("/analyze")
    async def analyze(
        file: UploadFile = File(...),
        very_large_threshold: float = Query(VERY_LARGE_TX_MIN_VALUE, ge=0.0),
        first_contact_threshold: float = Query(LARGE_FIRST_CONTACT_MIN_VALUE, ge=0.0),
        window_minutes: float = Query(RAPID_REPEAT_WINDOW_MINUTES, ge=0.0),
    ):
        """Upload ``{"users": [...], "transactions": [...]}`` and get flagged IDs per pass."""
        file_bytes = await _read_upload(file)
        started = time.perf_counter()

        try:
            dataset, parse_stats = parse_json(file_bytes)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

        outcomes = run_all(
            dataset,
            very_large_threshold=very_large_threshold,
            first_contact_threshold=first_contact_threshold,
            window_minutes=window_minutes,
        )
        result = format_output(outcomes, dataset, time.perf_counter() - started, parse_stats)

        summary = result["summary"]
        log.info(
            "Analysed %s (%d transactions) in %.2fs: very_large=%d first_contact=%d pattern=%d",
            file.filename,
            summary["total_transactions"],
            summary["processing_time_seconds"],
            summary["very_large_flagged"],
            summary["large_first_contact_flagged"],
            summary["pattern_anomaly_flagged"],
        )
        return JSONResponse(content=result)

    log.info("txflag v%s ready", __version__)
    return api


app = create_app()
