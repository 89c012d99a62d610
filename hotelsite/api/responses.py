from __future__ import annotations

from fastapi import Request


def _meta(request: Request) -> dict[str, object]:
    return {"request_id": getattr(request.state, "request_id", None)}


def success_payload(request: Request, *, data: object) -> dict[str, object]:
    return {"data": data, "meta": _meta(request)}


def error_payload(
    request: Request,
    *,
    code: str,
    message: str,
    details: object | None = None,
) -> dict[str, object]:
    error: dict[str, object] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error, "meta": _meta(request)}
