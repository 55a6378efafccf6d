"""Tests for container wiring."""

import asyncio

from biteqube.config import Settings
from biteqube.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.search_service is not None
    assert container.scan_service.vision_service.demo_mode
    assert container.chat_service.demo_mode
    assert container.billing_service.client is None
    asyncio.run(container.close_resources())


def test_build_container_with_integrations(settings: Settings) -> None:
    configured = settings.model_copy(
        update={
            "huggingface_api_key": "hf_test",
            "chatbase_api_key": "cb_test",
            "chatbase_chatbot_id": "bot-1",
            "stripe_secret_key": "sk_test_1",
        }
    )

    container = build_container(configured)

    assert not container.scan_service.vision_service.demo_mode
    assert not container.chat_service.demo_mode
    assert container.billing_service.client is not None
    asyncio.run(container.close_resources())
