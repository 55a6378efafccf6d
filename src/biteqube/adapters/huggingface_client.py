"""Hugging Face inference client for food image classification."""

from dataclasses import dataclass

import httpx

from biteqube.services.vision import ImageClassifier


@dataclass
class HttpxHuggingFaceClient(ImageClassifier):
    """HTTPX-backed image classification against the inference API."""

    api_key: str
    model: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str, model: str, base_url: str
    ) -> "HttpxHuggingFaceClient":
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def classify(self, image_base64: str) -> list[dict[str, object]]:
        """Send a base64 image and return label/score predictions."""
        response = await self.http_client.post(
            f"{self.base_url}/{self.model}",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={"inputs": image_base64},
            timeout=30,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise RuntimeError("Unexpected classification response")
        return data

    async def close(self) -> None:
        await self.http_client.aclose()
