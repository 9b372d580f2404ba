"""OpenAI chat completions backend."""

from __future__ import annotations

from typing import Any

from ..schemas import DEFAULT_MODELS
from .http import MAX_OUTPUT_TOKENS, TEMPERATURE, HTTPProviderBackend

SYSTEM_MESSAGE = (
    "You are an expert project evaluator. Analyse projects objectively against "
    "the provided criteria and answer only in the requested JSON format."
)


class OpenAIBackend(HTTPProviderBackend):
    provider = "openai"
    display_name = "OpenAI"
    default_model = DEFAULT_MODELS["openai"]
    url = "https://api.openai.com/v1/chat/completions"

    def endpoint(self) -> str:
        return self.url

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def build_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_OUTPUT_TOKENS,
        }

    def extract_text(self, data: Any) -> Any:
        return data["choices"][0]["message"]["content"]
