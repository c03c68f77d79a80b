"""
Dialogue Backend Client

HTTP client for the external conversational server:
POST /chat, POST /chat/stream, GET /health
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from truckparts.config import get_settings
from truckparts.core.errors import DialogueBackendError

logger = logging.getLogger(__name__)


class DialogueMessage(BaseModel):
    role: str
    content: str
    timestamp: Optional[str] = None


class DialogueResponse(BaseModel):
    """Non-streaming reply from POST /chat"""
    message: str
    session_id: str
    metadata: Optional[Dict[str, Any]] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None


class DialogueBackendClient:
    """
    Dialogue backend API client

    Pass-through wrapper: requests are sent as-is and the caller owns the
    response. Non-2xx replies raise DialogueBackendError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if accept:
            headers["Accept"] = accept
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _body(
        self,
        messages: List[DialogueMessage],
        session_id: Optional[str],
        config: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return {
            "messages": [m.model_dump(exclude_none=True) for m in messages],
            "session_id": session_id,
            "config": config,
        }

    async def send_message(
        self,
        messages: List[DialogueMessage],
        session_id: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """POST /chat"""
        url = f"{self.base_url}/chat"
        logger.info(f"[Dialogue] Sending {len(messages)} messages to {url} (session={session_id})")

        response = await self.client.post(
            url,
            json=self._body(messages, session_id, config),
            headers=self._headers()
        )

        if response.is_error:
            logger.error(f"[Dialogue] Server error: {response.text}")
            raise DialogueBackendError(
                f"Dialogue backend error: {response.status_code} - {response.text}",
                response.status_code,
                response.text
            )

        return response

    async def send_message_stream(
        self,
        messages: List[DialogueMessage],
        session_id: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """
        POST /chat/stream

        Returns an open response with the body unread. The caller must
        close it (aclose) once the stream has been relayed.
        """
        url = f"{self.base_url}/chat/stream"
        logger.info(f"[Dialogue] Streaming {len(messages)} messages to {url} (session={session_id})")

        request = self.client.build_request(
            "POST",
            url,
            json=self._body(messages, session_id, config),
            headers=self._headers(accept="text/event-stream")
        )
        response = await self.client.send(request, stream=True)

        if response.is_error:
            await response.aread()
            await response.aclose()
            logger.error(f"[Dialogue] Streaming error: {response.text}")
            raise DialogueBackendError(
                f"Dialogue backend streaming error: {response.status_code} - {response.text}",
                response.status_code,
                response.text
            )

        return response

    async def get_chat_response(
        self,
        messages: List[DialogueMessage],
        session_id: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> DialogueResponse:
        """Non-streaming chat, parsed"""
        response = await self.send_message(messages, session_id, config)
        return DialogueResponse.model_validate(response.json())

    async def check_health(self) -> httpx.Response:
        """GET /health; any status is returned, only transport errors raise"""
        return await self.client.get(f"{self.base_url}/health", headers=self._headers())

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()


# Global client instance
_dialogue_client: Optional[DialogueBackendClient] = None


def get_dialogue_client() -> DialogueBackendClient:
    """Get or create the dialogue backend client"""
    global _dialogue_client

    if _dialogue_client is None:
        settings = get_settings()
        _dialogue_client = DialogueBackendClient(
            base_url=settings.DIALOGUE_BACKEND_URL,
            api_key=settings.DIALOGUE_BACKEND_API_KEY,
            timeout=settings.DIALOGUE_BACKEND_TIMEOUT
        )

    return _dialogue_client


async def close_dialogue_client():
    """Close dialogue client on shutdown"""
    global _dialogue_client
    if _dialogue_client:
        await _dialogue_client.close()
        _dialogue_client = None
