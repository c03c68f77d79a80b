"""
Chat API endpoints

/chat streams the dialogue backend's reply straight through;
/chat/local runs the in-process conversation graph instead.
"""

import json
import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, List, Literal, Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from truckparts.agent.graph import ConversationGraph, get_conversation_graph
from truckparts.core.dialogue import (
    DialogueBackendClient,
    DialogueMessage,
    DialogueResponse,
    get_dialogue_client,
)
from truckparts.core.errors import DialogueBackendError

logger = logging.getLogger(__name__)

router = APIRouter()

# Sent with every proxied request
CHAT_CONFIG = {
    "truck_parts_mode": True,
    "intella_parts_integration": True,
}

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

_BASE36 = string.digits + string.ascii_lowercase


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Chat request model"""
    messages: List[ChatMessage]


class LocalMessage(BaseModel):
    role: Literal["user", "assistant", "system", "tool"]
    content: str
    name: Optional[str] = None


class TruckInfoModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[str] = None
    part_type: Optional[str] = Field(default=None, alias="partType")


class LocalChatRequest(BaseModel):
    messages: List[LocalMessage]
    truck_info: Optional[TruckInfoModel] = None


class LocalChatResponse(BaseModel):
    messages: List[Dict]
    current_step: str
    truck_info: TruckInfoModel
    search_results: List[Dict]


def new_session_id() -> str:
    """session_<epoch ms>_<9 base36 chars>"""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


def to_dialogue_messages(messages: List[ChatMessage]) -> List[DialogueMessage]:
    timestamp = datetime.now(timezone.utc).isoformat()
    return [
        DialogueMessage(role=m.role, content=m.content, timestamp=timestamp)
        for m in messages
    ]


def sse_error(message: str) -> Response:
    """A single SSE error event with HTTP 500"""
    payload = json.dumps({"type": "error", "content": message})
    return Response(
        content=f"data: {payload}\n\n",
        status_code=500,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


async def relay(upstream: httpx.Response) -> AsyncIterator[bytes]:
    """Forward upstream bytes unmodified, closing the upstream response at the end"""
    try:
        async for chunk in upstream.aiter_raw():
            yield chunk
    except httpx.HTTPError as e:
        logger.error(f"[Chat] Streaming error: {e}")
        raise
    finally:
        await upstream.aclose()


@router.post("/chat")
async def chat(
    request: Request,
    dialogue: DialogueBackendClient = Depends(get_dialogue_client)
):
    """Proxy a conversation to the dialogue backend and stream the reply"""

    try:
        body = ChatRequest.model_validate(await request.json())

        session_id = request.headers.get("x-session-id") or new_session_id()
        messages = to_dialogue_messages(body.messages)

        logger.info(f"[Chat] Forwarding to dialogue backend: session={session_id}, messages={len(messages)}")

        upstream = await dialogue.send_message_stream(messages, session_id, CHAT_CONFIG)

    except Exception as e:
        logger.error(f"[Chat] Error: {e}", exc_info=True)
        return sse_error(str(e) or "An error occurred while processing your request.")

    return StreamingResponse(
        relay(upstream),
        media_type="text/event-stream",
        headers={**SSE_HEADERS, "X-Session-ID": session_id},
    )


@router.post("/chat/complete", response_model=DialogueResponse)
async def chat_complete(
    body: ChatRequest,
    request: Request,
    dialogue: DialogueBackendClient = Depends(get_dialogue_client)
):
    """Non-streaming chat through the dialogue backend's /chat endpoint"""

    session_id = request.headers.get("x-session-id") or new_session_id()

    try:
        return await dialogue.get_chat_response(
            to_dialogue_messages(body.messages), session_id, CHAT_CONFIG
        )
    except DialogueBackendError as e:
        logger.error(f"[Chat] Dialogue backend rejected request: {e.message}")
        return JSONResponse(
            status_code=502,
            content={"success": False, "message": "Dialogue backend error", "error": e.message},
        )
    except Exception as e:
        logger.error(f"[Chat] Error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Chat request failed", "error": str(e)},
        )


@router.post("/chat/local", response_model=LocalChatResponse, response_model_by_alias=False)
async def chat_local(
    body: LocalChatRequest,
    graph: ConversationGraph = Depends(get_conversation_graph)
):
    """Run the local conversation graph over the message history"""

    truck_info = body.truck_info.model_dump() if body.truck_info else None

    final_state = await graph.process_messages(
        [m.model_dump(exclude_none=True) for m in body.messages],
        truck_info
    )

    return LocalChatResponse(
        messages=final_state["messages"],
        current_step=final_state["current_step"],
        truck_info=TruckInfoModel(**final_state["truck_info"]),
        search_results=final_state.get("search_results", []),
    )
