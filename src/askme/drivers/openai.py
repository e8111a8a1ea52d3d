"""OpenAI-compatible chat completions driver."""

from __future__ import annotations

from typing import Any

from askme.drivers.base import HttpDriver
from askme.errors import NotFound, Unauthorized
from askme.postprocess import CompletionResult, split_reasoning


class OpenAIDriver(HttpDriver):
    """Driver for ``/v1/chat/completions`` style endpoints.

    The base URL defaults to the OpenAI API and can point at any compatible
    server through the service ``url``.
    """

    provider = "OpenAI"
    default_base_url = "https://api.openai.com"
    allow_url_override = True
    requires_system_prompt = True
    status_errors = {401: Unauthorized, 404: NotFound}

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _chat_path(self) -> str:
        return "/v1/chat/completions"

    def _chat_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt},
            ],
        }

    def _parse_completion(self, data: Any) -> CompletionResult:
        return split_reasoning(self._text(data, "choices", 0, "message", "content"))

    def _models_path(self) -> str:
        return "/v1/models"

    def _parse_models(self, data: Any) -> list[str]:
        return self._string_field(self._array(data, "data"), "id")
