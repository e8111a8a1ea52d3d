"""Driver interface and shared HTTP mechanics for provider backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Final, Protocol, runtime_checkable

import requests

from askme.config import ServiceSpec
from askme.errors import (
    MalformedResponse,
    MissingCredential,
    MissingModel,
    MissingSystemPrompt,
    ProviderApiError,
    TransportError,
)
from askme.postprocess import CompletionResult

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Final = 120


@runtime_checkable
class Driver(Protocol):
    """Interface for one LLM backend."""

    @property
    def model(self) -> str:
        """Model name captured at construction."""

    @property
    def system_prompt(self) -> str:
        """System prompt text captured at construction."""

    def complete(self, prompt: str) -> CompletionResult:
        """Send ``prompt`` and return the normalized answer."""

    def list_models(self) -> list[str]:
        """Return model identifiers available from the backend."""


class HttpDriver(ABC):
    """Base class for JSON-over-HTTP drivers.

    Subclasses describe the provider through class attributes and implement
    the request body and response extraction hooks.
    """

    provider: ClassVar[str] = "provider"
    default_base_url: ClassVar[str] = ""
    allow_url_override: ClassVar[bool] = False
    requires_api_key: ClassVar[bool] = True
    requires_system_prompt: ClassVar[bool] = False
    status_errors: ClassVar[Mapping[int, type[ProviderApiError]]] = {}

    def __init__(self, spec: ServiceSpec, model: str | None, system_prompt: str) -> None:
        if not model:
            raise MissingModel(self.provider)
        if self.requires_api_key and not spec.api_key:
            raise MissingCredential(self.provider)
        if self.requires_system_prompt and not system_prompt:
            raise MissingSystemPrompt(self.provider)

        base_url = self.default_base_url
        if self.allow_url_override and spec.url:
            base_url = spec.url
        self._base_url = base_url.rstrip("/")
        self._api_key = spec.api_key
        self._model = model
        self._system_prompt = system_prompt
        self.timeout: float = DEFAULT_TIMEOUT

    @property
    def model(self) -> str:
        return self._model

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    @property
    def base_url(self) -> str:
        return self._base_url

    def complete(self, prompt: str) -> CompletionResult:
        data = self._request("POST", self._chat_path(), self._chat_payload(prompt))
        return self._parse_completion(data)

    def list_models(self) -> list[str]:
        data = self._request("GET", self._models_path())
        return self._parse_models(data)

    # Provider hooks.

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def _chat_path(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def _chat_payload(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def _parse_completion(self, data: Any) -> CompletionResult:
        raise NotImplementedError

    @abstractmethod
    def _models_path(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def _parse_models(self, data: Any) -> list[str]:
        raise NotImplementedError

    # Shared helpers.

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"Content-Type": "application/json", **self._auth_headers()}
        _LOGGER.debug("%s request: %s %s", self.provider, method, url)

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportError(self.provider, exc) from exc

        status = response.status_code
        if not 200 <= status < 300:
            error_cls = self.status_errors.get(status, ProviderApiError)
            raise error_cls(self.provider, status, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(self.provider, "response body is not valid JSON") from exc

    def _lookup(self, data: Any, *path: str | int) -> Any:
        current = data
        for key in path:
            if isinstance(key, int):
                if not isinstance(current, list) or not -len(current) <= key < len(current):
                    raise MalformedResponse(self.provider, f"missing {_describe(path)}")
            elif not isinstance(current, dict) or key not in current:
                raise MalformedResponse(self.provider, f"missing {_describe(path)}")
            current = current[key]
        return current

    def _text(self, data: Any, *path: str | int) -> str:
        value = self._lookup(data, *path)
        if not isinstance(value, str):
            raise MalformedResponse(self.provider, f"{_describe(path)} is not a string")
        return value

    def _array(self, data: Any, key: str) -> list[Any]:
        value = data.get(key) if isinstance(data, dict) else None
        if not isinstance(value, list):
            raise MalformedResponse(self.provider, f"missing '{key}' array")
        return value

    def _string_field(self, entries: list[Any], field: str) -> list[str]:
        values: list[str] = []
        for entry in entries:
            if isinstance(entry, dict) and isinstance(entry.get(field), str):
                values.append(entry[field])
        return values


def _describe(path: tuple[str | int, ...]) -> str:
    parts = [f"[{part}]" if isinstance(part, int) else f".{part}" for part in path]
    return "".join(parts).lstrip(".") or "<root>"
