"""
Health API endpoint

Proxies the dialogue backend's health check
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from truckparts.core.dialogue import DialogueBackendClient, get_dialogue_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(dialogue: DialogueBackendClient = Depends(get_dialogue_client)):
    """
    Dialogue backend health

    Any HTTP reply is reported (healthy only on 2xx); a transport
    failure is a 500 with connected=false.
    """
    try:
        response = await dialogue.check_health()
    except Exception as e:
        logger.error(f"[Health] Dialogue backend unreachable: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "status": "unhealthy",
                "dialogue_backend": {
                    "url": dialogue.base_url,
                    "connected": False,
                    "error": str(e) or "Unknown error",
                },
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    is_healthy = response.is_success

    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "dialogue_backend": {
            "url": dialogue.base_url,
            "connected": is_healthy,
            "status": response.status_code,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
