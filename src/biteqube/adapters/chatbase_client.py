"""Chatbase chat API client."""

import logging
from dataclasses import dataclass

import httpx

from biteqube.services.chat import ChatClient

logger = logging.getLogger(__name__)

CHAT_MODEL = "gpt-3.5-turbo"
CHAT_TEMPERATURE = 0.7


@dataclass
class HttpxChatbaseClient(ChatClient):
    """HTTPX-backed Chatbase client."""

    api_key: str
    chatbot_id: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str, chatbot_id: str, base_url: str
    ) -> "HttpxChatbaseClient":
        return cls(
            api_key=api_key,
            chatbot_id=chatbot_id,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def send(
        self, message: str, conversation_id: str | None = None
    ) -> dict[str, object]:
        payload: dict[str, object] = {
            "messages": [{"content": message, "role": "user"}],
            "chatbotId": self.chatbot_id,
            "stream": False,
            "temperature": CHAT_TEMPERATURE,
            "model": CHAT_MODEL,
        }
        if conversation_id:
            payload["conversationId"] = conversation_id
        response = await self.http_client.post(
            f"{self.base_url}/chat",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json=payload,
            timeout=30,
        )
        if response.is_error:
            logger.warning(
                "Chatbase API error",
                extra={"status_code": response.status_code, "body": response.text},
            )
        response.raise_for_status()
        data = response.json()
        return data if isinstance(data, dict) else {}

    async def close(self) -> None:
        await self.http_client.aclose()
