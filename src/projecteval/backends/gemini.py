"""Google Gemini generateContent backend."""

from __future__ import annotations

from typing import Any

from ..schemas import DEFAULT_MODELS
from .http import MAX_OUTPUT_TOKENS, TEMPERATURE, HTTPProviderBackend


class GeminiBackend(HTTPProviderBackend):
    provider = "gemini"
    display_name = "Gemini"
    default_model = DEFAULT_MODELS["gemini"]
    base_url = "https://generativelanguage.googleapis.com/v1beta/models"

    def endpoint(self) -> str:
        return f"{self.base_url}/{self._model}:generateContent"

    def params(self) -> dict[str, str]:
        return {"key": self._api_key}

    def build_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
            },
        }

    def extract_text(self, data: Any) -> Any:
        return data["candidates"][0]["content"]["parts"][0]["text"]
