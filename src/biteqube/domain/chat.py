"""Chat assistant models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatReply:
    text: str
    conversation_id: str
    language: str
