import json

import structlog
from fastapi import APIRouter, Request, status

logger = structlog.get_logger()

router = APIRouter(prefix="/api/webhook", tags=["webhook"])


@router.post("", status_code=status.HTTP_200_OK)
async def receive_webhook(request: Request) -> dict[str, bool]:
    """Accept Farcaster mini-app notifications. The payload is only logged."""
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw else {}
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("webhook_payload_not_json", size_bytes=len(raw))
        payload = {}

    logger.info("webhook_received", payload=payload)
    return {"success": True}


@router.get("", status_code=status.HTTP_200_OK)
async def webhook_status() -> dict[str, str]:
    return {"status": "ok"}
