from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException

from services.store.app import observability
from services.store.app.logging import logger
from services.store.app.middleware import request_body
from services.store.app.settings import StoreSettings


async def ping() -> dict:
    return {"pong": True}


async def stripe_webhook(
    body: Any = Depends(request_body),
    stripe_signature: str | None = Header(default=None),
) -> dict:
    # Signature verification happens downstream of this service; only the raw payload is accepted here.
    if not isinstance(body, bytes):
        observability.WEBHOOK_EVENTS.labels("stripe", "rejected").inc()
        raise HTTPException(status_code=400, detail="expected an application/json payload")
    observability.WEBHOOK_EVENTS.labels("stripe", "received").inc()
    logger.info("webhook_received", provider="stripe", size=len(body), signed=stripe_signature is not None)
    return {"received": True}


def build_router(settings: StoreSettings) -> APIRouter:
    """Default route table; the webhook lives wherever the body parser keeps raw bytes."""
    router = APIRouter()
    router.add_api_route("/ping", ping, methods=["GET"])
    router.add_api_route(settings.webhook_path, stripe_webhook, methods=["POST"])
    return router
