from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..client import InvidiousClient
from ..config import Settings
from ..errors import TubeBridgeError


def get_client(request: Request) -> InvidiousClient:
    instance = getattr(request.app.state, "client", None)
    if instance is None:
        raise HTTPException(status_code=503, detail="upstream client not initialized")
    return instance


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_response(message: str, status_code: int, details: Optional[str] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(body, status_code=status_code)


def error_from(exc: TubeBridgeError) -> JSONResponse:
    return error_response(str(exc), exc.status_code)
