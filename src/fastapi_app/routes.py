"""API routes for Bedrock Quota Guard.

Endpoints
─────────
POST /sync     – Fetch quotas, write dashboard + alarms + alarm topic.
GET  /quotas   – Return resolved quota values with their model.
GET  /preview  – Render dashboard + alarms without writing anything.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from config.quotas import QuotaGuardError
from helpers.constants import APP_LOGGER

router = APIRouter()

# Lazy singleton for the heavy service
_monitor: Any = None


def _get_monitor():
    global _monitor
    if _monitor is None:
        from services.quota_monitor import QuotaMonitorService

        _monitor = QuotaMonitorService()
    return _monitor


def _configuration_error_response(exc: QuotaGuardError) -> JSONResponse:
    APP_LOGGER.error(msg=str(exc), quota_code=exc.quota_code)
    return JSONResponse(
        content={"error": str(exc), "quota_code": exc.quota_code}, status_code=422
    )


# ── Sync ─────────────────────────────────────────────────────────────────

@router.post("/sync")
def run_sync() -> JSONResponse:
    """Execute a full synchronisation pass."""
    monitor = _get_monitor()
    try:
        result = monitor.run_sync()
        return JSONResponse(content=result, status_code=200)
    except QuotaGuardError as exc:
        return _configuration_error_response(exc)
    except Exception as exc:
        APP_LOGGER.error(msg=f"Quota sync failed: {exc}")
        return JSONResponse(content={"error": str(exc)}, status_code=500)


# ── Read-only views ──────────────────────────────────────────────────────

@router.get("/quotas")
def get_quotas() -> JSONResponse:
    """Return every registered quota with its current value."""
    monitor = _get_monitor()
    try:
        return JSONResponse(
            content={"quotas": monitor.get_quota_values()}, status_code=200
        )
    except QuotaGuardError as exc:
        return _configuration_error_response(exc)
    except Exception as exc:
        APP_LOGGER.error(msg=f"Quota lookup failed: {exc}")
        return JSONResponse(content={"error": str(exc)}, status_code=500)


@router.get("/preview")
def get_preview() -> JSONResponse:
    """Return the dashboard body and alarm definitions a sync would write."""
    monitor = _get_monitor()
    try:
        return JSONResponse(content=monitor.preview(), status_code=200)
    except QuotaGuardError as exc:
        return _configuration_error_response(exc)
    except Exception as exc:
        APP_LOGGER.error(msg=f"Preview failed: {exc}")
        return JSONResponse(content={"error": str(exc)}, status_code=500)


@router.get("/favicon.ico")
def favicon() -> Response:
    return Response(status_code=204)
