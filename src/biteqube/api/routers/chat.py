"""Chat assistant endpoints."""

from fastapi import APIRouter, Request

from biteqube.api.deps import get_container
from biteqube.api.schemas import ChatRequest
from biteqube.services.chat import QUICK_PROMPTS

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def send_message(body: ChatRequest, request: Request) -> dict[str, object]:
    reply = await get_container(request).chat_service.send(
        body.message, body.conversation_id
    )
    return {
        "text": reply.text,
        "conversationId": reply.conversation_id,
        "language": reply.language,
    }


@router.get("/prompts")
async def quick_prompts() -> dict[str, object]:
    return {"prompts": list(QUICK_PROMPTS)}
