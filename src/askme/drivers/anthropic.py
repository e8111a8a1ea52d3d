"""Anthropic Messages API driver."""

from __future__ import annotations

from typing import Any, Final

from askme.drivers.base import HttpDriver
from askme.postprocess import CompletionResult, split_reasoning

ANTHROPIC_VERSION: Final = "2023-06-01"
MAX_TOKENS: Final = 1024


class AnthropicDriver(HttpDriver):
    """Driver for ``/v1/messages``; the endpoint is fixed."""

    provider = "Anthropic"
    default_base_url = "https://api.anthropic.com"

    def _auth_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _chat_path(self) -> str:
        return "/v1/messages"

    def _chat_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "system": self.system_prompt,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_TOKENS,
        }

    def _parse_completion(self, data: Any) -> CompletionResult:
        return split_reasoning(self._text(data, "content", 0, "text"))

    def _models_path(self) -> str:
        return "/v1/models"

    def _parse_models(self, data: Any) -> list[str]:
        return self._string_field(self._array(data, "data"), "id")
