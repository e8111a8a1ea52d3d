"""Google Gemini ``generateContent`` driver."""

from __future__ import annotations

from typing import Any

from askme.drivers.base import HttpDriver
from askme.postprocess import CompletionResult, split_reasoning

_MODEL_PREFIX = "models/"


class GeminiDriver(HttpDriver):
    """Driver for the Gemini REST API; the endpoint is fixed."""

    provider = "Gemini"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"

    def _auth_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self._api_key or ""}

    def _chat_path(self) -> str:
        return f"/models/{self.model}:generateContent"

    def _chat_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "system_instruction": {"parts": [{"text": self.system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }

    def _parse_completion(self, data: Any) -> CompletionResult:
        text = self._text(data, "candidates", 0, "content", "parts", 0, "text")
        return split_reasoning(text)

    def _models_path(self) -> str:
        return "/models"

    def _parse_models(self, data: Any) -> list[str]:
        names = self._string_field(self._array(data, "models"), "name")
        return [name.removeprefix(_MODEL_PREFIX) for name in names]
