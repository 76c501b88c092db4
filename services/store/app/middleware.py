from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from services.store.app.logging import logger


JSON_MEDIA_TYPE = "application/json"


class BodyTooLarge(ValueError):
    pass


def _is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() == JSON_MEDIA_TYPE


def _under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def parse_json_strict(raw: bytes) -> Any:
    """Decode a JSON body, accepting only an object or an array at the top level."""
    value = json.loads(raw)
    if not isinstance(value, (dict, list)):
        raise ValueError("JSON body must be an object or an array")
    return value


def body_parser(webhook_path: str, max_body_size: int) -> Callable:
    """
    Build the middleware that decodes request bodies into `request.state.body`.

    Paths under `webhook_path` keep the exact bytes so the payment provider's
    signature can be checked against them. Everywhere else JSON bodies are parsed.
    Requests without a JSON content type, or with an empty body, get None.
    Bodies over `max_body_size` bytes are rejected before parsing.
    """

    async def _parse_body(request: Request, call_next: Callable) -> Response:
        body: Any = None
        if _is_json(request):
            declared = request.headers.get("content-length")
            if declared is not None and declared.isdigit() and int(declared) > max_body_size:
                raise BodyTooLarge(f"request body exceeds {max_body_size} bytes")
            raw = await request.body()
            if len(raw) > max_body_size:
                raise BodyTooLarge(f"request body exceeds {max_body_size} bytes")
            if _under(request.url.path, webhook_path):
                body = raw
            elif raw:
                body = parse_json_strict(raw)
        request.state.body = body
        return await call_next(request)

    return _parse_body


async def handle_errors(request: Request, call_next: Callable) -> Response:
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("request_failed", method=request.method, path=request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})


def request_body(request: Request) -> Any:
    return getattr(request.state, "body", None)
