"""Ollama chat driver."""

from __future__ import annotations

from typing import Any

from askme.drivers.base import HttpDriver
from askme.errors import NotFound
from askme.postprocess import CompletionResult


class OllamaDriver(HttpDriver):
    """Driver for a self-hosted Ollama server.

    Reasoning comes from the ``thinking`` field of the response rather than
    from tags embedded in the answer.
    """

    provider = "Ollama"
    default_base_url = "http://localhost:11434"
    allow_url_override = True
    requires_api_key = False
    requires_system_prompt = True
    status_errors = {404: NotFound}

    def _auth_headers(self) -> dict[str, str]:
        if self._api_key:
            return {"Authorization": f"Bearer {self._api_key}"}
        return {}

    def _chat_path(self) -> str:
        return "/api/chat"

    def _chat_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
        }

    def _parse_completion(self, data: Any) -> CompletionResult:
        answer = self._text(data, "message", "content")

        thinking = data.get("thinking")
        if thinking is None:
            thinking = data["message"].get("thinking")

        return CompletionResult(
            answer=answer,
            reasoning=thinking if isinstance(thinking, str) else None,
        )

    def _models_path(self) -> str:
        return "/api/tags"

    def _parse_models(self, data: Any) -> list[str]:
        return self._string_field(self._array(data, "models"), "name")
