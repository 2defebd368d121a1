"""
App-level exception handlers.

Every error response body has the same shape: {"error": "<message>"}.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _validation_message(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request."

    err = errors[0]
    ctx = err.get("ctx") or {}
    # Messages raised by our own validators are already user-facing.
    if err.get("type") == "value_error" and ctx.get("error") is not None:
        return str(ctx["error"])
    if err.get("type") == "json_invalid":
        return "Request body must be valid JSON."

    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
    field = ".".join(loc)
    msg = str(err.get("msg") or "invalid value")
    return f"{field}: {msg}" if field else msg


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(list(exc.errors())))


def install(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


@contextmanager
def backend_errors(logger: logging.Logger, tag: str, message: str) -> Iterator[None]:
    """
    Turn anything unexpected raised inside the block into a fixed 500.

    The traceback is logged under `<tag>_failed`; the client only sees
    `message`. HTTPExceptions (client errors) pass through unchanged.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("%s_failed", tag)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message) from exc
