"""Multilingual chat assistant backed by Chatbase."""

import logging
import random
import re
from dataclasses import dataclass, field
from typing import Protocol

from biteqube.domain.chat import ChatReply

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
DEMO_CONVERSATION = "demo-conversation"
FALLBACK_CONVERSATION = "fallback-conversation"
NEW_CONVERSATION = "new-conversation"
DEFAULT_REPLY = (
    "I'm here to help with your BiteQube questions! Please try asking again."
)

# Checked in order; the first matching language wins.
LANGUAGE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("es", re.compile(r"\b(hola|gracias|por favor|ayuda|receta|comida)\b", re.I)),
    (
        "fr",
        re.compile(
            r"\b(bonjour|merci|s'il vous plaît|aide|recette|nourriture)\b", re.I
        ),
    ),
    ("de", re.compile(r"\b(hallo|danke|bitte|hilfe|rezept|essen)\b", re.I)),
    ("it", re.compile(r"\b(ciao|grazie|per favore|aiuto|ricetta|cibo)\b", re.I)),
    ("pt", re.compile(r"\b(olá|obrigado|por favor|ajuda|receita|comida)\b", re.I)),
    ("hi", re.compile(r"[\u0900-\u097F]")),
    (
        "mr",
        re.compile(
            r"\b(नमस्कार|धन्यवाद|कृपया|मदत|रेसिपी|अन्न|खाणे)\b|[\u0900-\u097F]"
        ),
    ),
    ("zh", re.compile(r"[\u4e00-\u9fff]")),
    ("ja", re.compile(r"[\u3040-\u309f\u30a0-\u30ff]")),
    ("ar", re.compile(r"[\u0600-\u06ff]")),
)

DEMO_REPLIES = {
    "en": (
        "Hello! I'm your BiteQube assistant. I can help you with food scanning, "
        "recipes, and cooking questions. What would you like to know?"
    ),
    "es": (
        "¡Hola! Soy tu asistente de BiteQube. Puedo ayudarte con escaneo de "
        "comida, recetas y preguntas de cocina. ¿Qué te gustaría saber?"
    ),
    "fr": (
        "Bonjour! Je suis votre assistant BiteQube. Je peux vous aider avec le "
        "scan de nourriture, les recettes et les questions de cuisine. "
        "Que voulez-vous savoir?"
    ),
    "de": (
        "Hallo! Ich bin Ihr BiteQube-Assistent. Ich kann Ihnen beim Scannen von "
        "Lebensmitteln, Rezepten und Kochfragen helfen. Was möchten Sie wissen?"
    ),
    "it": (
        "Ciao! Sono il tuo assistente BiteQube. Posso aiutarti con la scansione "
        "del cibo, ricette e domande di cucina. Cosa vorresti sapere?"
    ),
    "pt": (
        "Olá! Sou seu assistente BiteQube. Posso ajudá-lo com digitalização de "
        "alimentos, receitas e questões culinárias. O que você gostaria de saber?"
    ),
    "hi": (
        "नमस्ते! मैं आपका BiteQube सहायक हूं। मैं खाना स्कैन करने, रेसिपी और "
        "खाना पकाने के सवालों में आपकी मदद कर सकता हूं। आप क्या जानना चाहेंगे?"
    ),
    "mr": (
        "नमस्कार! मी तुमचा BiteQube सहाय्यक आहे। मी अन्न स्कॅन करणे, रेसिपी "
        "आणि स्वयंपाकाच्या प्रश्नांमध्ये तुम्हाला मदत करू शकतो। तुम्हाला काय "
        "जाणून घ्यायचे आहे?"
    ),
    "zh": (
        "你好！我是您的 BiteQube 助手。我可以帮助您进行食物扫描、食谱和烹饪问题。"
        "您想了解什么？"
    ),
    "ja": (
        "こんにちは！私はあなたのBiteQubeアシスタントです。食べ物のスキャン、"
        "レシピ、料理の質問でお手伝いできます。何を知りたいですか？"
    ),
    "ar": (
        "مرحباً! أنا مساعد BiteQube الخاص بك. يمكنني مساعدتك في مسح الطعام "
        "والوصفات وأسئلة الطبخ. ماذا تريد أن تعرف؟"
    ),
}

FALLBACK_REPLIES = {
    "en": (
        "I'm here to help with BiteQube! Ask me about food scanning, recipes, "
        "or cooking tips.",
        "How can I assist you with BiteQube today? I can help with recipes, "
        "food recognition, or app features.",
        "I'm your BiteQube assistant. What would you like to know about our app?",
    ),
    "es": (
        "¡Estoy aquí para ayudar con BiteQube! Pregúntame sobre escaneo de "
        "comida, recetas o consejos de cocina.",
        "¿Cómo puedo ayudarte con BiteQube hoy? Puedo ayudar con recetas, "
        "reconocimiento de comida o funciones de la app.",
        "Soy tu asistente de BiteQube. ¿Qué te gustaría saber sobre nuestra app?",
    ),
    "fr": (
        "Je suis là pour aider avec BiteQube! Demandez-moi des informations sur "
        "le scan de nourriture, les recettes ou les conseils de cuisine.",
        "Comment puis-je vous aider avec BiteQube aujourd'hui? Je peux aider avec "
        "les recettes, la reconnaissance alimentaire ou les fonctionnalités de "
        "l'app.",
        "Je suis votre assistant BiteQube. Que voulez-vous savoir sur notre app?",
    ),
    "mr": (
        "मी BiteQube साठी मदत करण्यासाठी येथे आहे! अन्न स्कॅनिंग, रेसिपी किंवा "
        "स्वयंपाकाच्या टिप्सबद्दल मला विचारा.",
        "आज मी BiteQube मध्ये तुम्हाला कशी मदत करू शकतो? मी रेसिपी, अन्न ओळख "
        "किंवा अॅप वैशिष्ट्यांमध्ये मदत करू शकतो.",
        "मी तुमचा BiteQube सहाय्यक आहे. आमच्या अॅपबद्दल तुम्हाला काय जाणून "
        "घ्यायचे आहे?",
    ),
}

QUICK_PROMPTS = (
    "How can you help me?",
    "What are your capabilities?",
    "Tell me something interesting",
    "Help me with a question",
    "What can you do?",
    "Give me some advice",
)


class ChatClient(Protocol):
    """Interface for the hosted chatbot."""

    async def send(
        self, message: str, conversation_id: str | None = None
    ) -> dict[str, object]:
        """Send one user message and return the raw response payload."""


def detect_language(message: str) -> str:
    for language, pattern in LANGUAGE_PATTERNS:
        if pattern.search(message):
            return language
    return DEFAULT_LANGUAGE


def recipe_prompt(recipe_name: str) -> str:
    return (
        f"I'm looking at the recipe for {recipe_name}. Can you help me with "
        "cooking tips, ingredient substitutions, or answer any questions about "
        "this dish?"
    )


def food_prompt(label: str) -> str:
    return (
        f'I just scanned an image and detected "{label}". Can you tell me more '
        "about this dish and suggest some recipes?"
    )


@dataclass
class ChatService:
    """Proxy chat messages, degrading to canned replies."""

    client: ChatClient | None
    rng: random.Random = field(default_factory=random.Random)

    @property
    def demo_mode(self) -> bool:
        return self.client is None

    async def send(
        self, message: str, conversation_id: str | None = None
    ) -> ChatReply:
        language = detect_language(message)
        if self.client is None:
            logger.warning("Chat assistant not configured, using demo mode")
            return ChatReply(
                text=DEMO_REPLIES.get(language, DEMO_REPLIES[DEFAULT_LANGUAGE]),
                conversation_id=DEMO_CONVERSATION,
                language=language,
            )
        enhanced = f"[Language: {language}] [App: BiteQube] {message}"
        try:
            data = await self.client.send(enhanced, conversation_id)
        except Exception:
            logger.exception(
                "Chat request failed", extra={"language": language}
            )
            replies = FALLBACK_REPLIES.get(
                language, FALLBACK_REPLIES[DEFAULT_LANGUAGE]
            )
            return ChatReply(
                text=self.rng.choice(replies),
                conversation_id=conversation_id or FALLBACK_CONVERSATION,
                language=language,
            )
        resolved_id = _conversation_id(data) or conversation_id or NEW_CONVERSATION
        return ChatReply(
            text=extract_reply_text(data) or DEFAULT_REPLY,
            conversation_id=resolved_id,
            language=language,
        )


def extract_reply_text(data: dict[str, object]) -> str | None:
    """Pull the reply from whichever field the chatbot populated."""
    for key in ("text", "response", "message", "content"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        first = choices[0]
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str) and content:
                return content
        text = first.get("text")
        if isinstance(text, str) and text:
            return text
    return None


def _conversation_id(data: dict[str, object]) -> str | None:
    for key in ("conversationId", "conversation_id"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None
