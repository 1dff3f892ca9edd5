# FILE: pharmacy_pos/api/response.py
"""
JSON envelopes for every endpoint.

Success: ``{"ok": true, "data": ..., "meta": {...}}`` (meta only on lists).
Failure: ``{"ok": false, "error": {"msg", "code", "details"}}``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from pharmacy_pos.services.errors import BillingError


def _respond(payload: Dict[str, Any], status_code: int) -> JSONResponse:
    # Decimal / date / Enum -> JSON-safe
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def ok(data: Any = None, *, status_code: int = 200) -> JSONResponse:
    return _respond({"ok": True, "data": data}, status_code)


def ok_list(rows: Sequence[Any], **meta: Any) -> JSONResponse:
    """List payload with ``meta.count`` plus any filters echoed back."""
    meta = {"count": len(rows), **{k: v for k, v in meta.items() if v is not None}}
    return _respond({"ok": True, "data": list(rows), "meta": meta}, 200)


def err(
    error: Union[str, BillingError],
    *,
    status_code: int = 400,
    code: Optional[str] = None,
    details: Any = None,
) -> JSONResponse:
    if isinstance(error, BillingError):
        msg = error.message
        code = code or error.code
        details = details if details is not None else (error.details or None)
    else:
        msg = error
    return _respond(
        {"ok": False, "error": {"msg": msg, "code": code, "details": details}},
        status_code,
    )
