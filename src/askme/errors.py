"""Error taxonomy shared by configuration, resolution, and provider drivers."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class AskmeError(Exception):
    """Base class for every error surfaced to the CLI layer."""


class ConfigError(AskmeError, ValueError):
    """Raised when configuration cannot be loaded or is incomplete."""


class NoConfigurationFound(ConfigError):
    """Raised when neither a global nor a local configuration file exists."""

    def __init__(self, checked: Iterable[Path]) -> None:
        self.checked = tuple(checked)
        locations = ", ".join(str(path) for path in self.checked) or "<none>"
        super().__init__(f"No configuration file found. Checked: {locations}")


class MissingConfigField(ConfigError):
    """Raised when a required scalar field is absent after merging sources."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing '{field}' in configuration")


class ServiceNotFound(AskmeError):
    """Raised when the requested service is not declared in configuration."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        known = ", ".join(self.available) or "none"
        super().__init__(f"Service '{name}' not found in configuration. Available: {known}")


class UnknownProviderClass(AskmeError):
    """Raised when a service declares a provider class with no driver."""

    def __init__(self, given: str, valid: Iterable[str]) -> None:
        self.given = given
        self.valid = tuple(valid)
        super().__init__(
            f"Unknown service class '{given}'. Valid classes: {', '.join(self.valid)}"
        )


class MissingCredential(AskmeError):
    """Raised when a provider requires an API key and none is configured."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] An API key is required ('api_key' in the service)")


class MissingSystemPrompt(AskmeError):
    """Raised when a provider requires a non-empty system prompt."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] A non-empty system prompt is required")


class MissingModel(AskmeError):
    """Raised when no model was given on the command line or in the service."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] A model is required (use --model or set 'model')")


class ProviderError(AskmeError):
    """Base for failures talking to a provider; carries the provider label."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class TransportError(ProviderError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, provider: str, cause: Exception) -> None:
        self.cause = cause
        super().__init__(provider, f"Request failed: {cause}")


class ProviderApiError(ProviderError):
    """Raised for non-2xx HTTP responses."""

    def __init__(self, provider: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(provider, f"API error: Status: {status_code}, Body: {body}")


class Unauthorized(ProviderApiError):
    """HTTP 401: the API key was rejected."""

    def __str__(self) -> str:
        return f"[{self.provider}] Unauthorized: check the API key for this service"


class NotFound(ProviderApiError):
    """HTTP 404: the endpoint or model does not exist."""

    def __str__(self) -> str:
        return f"[{self.provider}] Not found: check the service URL and model name"


class MalformedResponse(ProviderError):
    """Raised when a provider response lacks the expected JSON shape."""

    def __init__(self, provider: str, detail: str) -> None:
        self.detail = detail
        super().__init__(provider, f"Invalid response format: {detail}")
