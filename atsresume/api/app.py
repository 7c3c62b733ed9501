"""
HTTP entry points.

Routes:
    POST /api/export-pdf    resume JSON -> PDF attachment
    POST /api/preview       resume JSON -> composed HTML
    POST /api/metrics-user  record a first-seen client identifier
    GET  /api/metrics       aggregate counters
    GET  /health            liveness

Run with:
    uvicorn atsresume.api.app:app
"""

import json
import os
import sqlite3
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from atsresume import __version__
from atsresume.api.logger import _log_error, _log_info, _log_warning, setup_api_logger
from atsresume.contexts.metrics import MetricsStore
from atsresume.contexts.rendering import DocumentExporter, ExportFailedError, get_default_exporter
from atsresume.contexts.templating import (
    AssetRegistry,
    InputMalformedError,
    ResumeData,
    build_html,
    get_asset_registry,
)

load_dotenv()
EXPORT_TIMEOUT_S = float(os.getenv("ATSRESUME_EXPORT_TIMEOUT_S", "60"))
PDF_FILENAME = "cv.pdf"

app = FastAPI(title="atsresume API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_metrics_store: Optional[MetricsStore] = None


@app.on_event("startup")
def _startup():
    setup_api_logger()
    _log_info(f"atsresume API {__version__} starting (export deadline {EXPORT_TIMEOUT_S}s)")


def get_exporter() -> DocumentExporter:
    return get_default_exporter()


def get_assets() -> AssetRegistry:
    return get_asset_registry()


def get_metrics_store() -> Optional[MetricsStore]:
    """Return the metrics store, or None when the backend cannot be opened."""
    global _metrics_store
    if _metrics_store is None:
        try:
            _metrics_store = MetricsStore()
        except (sqlite3.Error, OSError) as e:
            _log_warning(f"Metrics backend unavailable: {e}")
            return None
    return _metrics_store


def _error(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


def _record_pdf_produced(store: Optional[MetricsStore]) -> None:
    """Count a produced PDF. Metrics failures never fail the export."""
    if store is None:
        return
    try:
        store.increment_pdfs()
    except Exception as e:
        _log_warning(f"Failed to count PDF: {e}")


async def _read_resume(request: Request) -> ResumeData:
    return ResumeData.from_json(await request.body())


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/api/export-pdf")
async def export_pdf_route(
    request: Request,
    exporter: DocumentExporter = Depends(get_exporter),
    assets: AssetRegistry = Depends(get_assets),
    metrics: Optional[MetricsStore] = Depends(get_metrics_store),
):
    try:
        resume = await _read_resume(request)
    except InputMalformedError as e:
        _log_warning(f"Rejected resume body: {e}")
        return _error(400, "Invalid resume data", str(e))

    try:
        html = build_html(resume, registry=assets)
        pdf = await exporter.export(html, timeout_s=EXPORT_TIMEOUT_S)
    except ExportFailedError as e:
        _log_error(f"PDF export failed: {e.message}")
        return _error(500, "PDF export failed", e.details)
    except Exception as e:
        _log_error(f"PDF pipeline failed: {e}")
        return _error(500, "PDF export failed", str(e))

    _record_pdf_produced(metrics)

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )


@app.post("/api/preview")
async def preview_route(request: Request, assets: AssetRegistry = Depends(get_assets)):
    try:
        resume = await _read_resume(request)
    except InputMalformedError as e:
        return _error(400, "Invalid resume data", str(e))

    try:
        html = build_html(resume, registry=assets)
    except Exception as e:
        _log_error(f"Preview failed: {e}")
        return _error(500, "Preview failed", str(e))

    return HTMLResponse(content=html)


@app.post("/api/metrics-user")
async def metrics_user_route(
    request: Request, metrics: Optional[MetricsStore] = Depends(get_metrics_store)
):
    try:
        body = json.loads(await request.body() or b"{}")
        if isinstance(body, str):
            body = json.loads(body)
    except ValueError:
        return _error(400, "Invalid body", "Body must be a JSON object")

    client_id = body.get("clientId") if isinstance(body, dict) else None
    if not client_id or not isinstance(client_id, str):
        return JSONResponse(status_code=400, content={"error": "clientId required"})

    if metrics is None:
        return _error(500, "metrics-user failed", "Metrics backend unavailable")

    try:
        counted = metrics.record_client(client_id)
    except sqlite3.Error as e:
        _log_error(f"metrics-user failed: {e}")
        return _error(500, "metrics-user failed", str(e))

    return {"ok": True, "counted": counted}


@app.get("/api/metrics")
def metrics_route(metrics: Optional[MetricsStore] = Depends(get_metrics_store)):
    if metrics is None:
        return _error(500, "metrics failed", "Metrics backend unavailable")

    try:
        snapshot = metrics.read_counters()
    except sqlite3.Error as e:
        _log_error(f"metrics failed: {e}")
        return _error(500, "metrics failed", str(e))

    return {"usersTotal": snapshot.users_total, "pdfsTotal": snapshot.pdfs_total}
