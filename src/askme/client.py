"""Session client: resolves service, model, and system prompt, then delegates."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from askme.config import Configuration, ServiceSpec
from askme.drivers.base import Driver
from askme.drivers.registry import create_driver
from askme.errors import ServiceNotFound
from askme.postprocess import CompletionResult

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedInvocation:
    """Concrete values handed to a driver."""

    service_name: str
    model: str | None
    system_prompt_text: str


def resolve_reference(mapping: Mapping[str, str], candidate: str) -> str:
    """Return the text stored under ``candidate``, or ``candidate`` itself."""

    return mapping.get(candidate, candidate)


def resolve_invocation(
    service_name: str | None,
    config: Configuration,
    model: str | None = None,
    system_prompt: str | None = None,
) -> tuple[ServiceSpec, ResolvedInvocation]:
    """Apply override-then-configuration fallback for one invocation."""

    name = service_name if service_name is not None else config.default_service
    spec = config.services.get(name)
    if spec is None:
        raise ServiceNotFound(name, config.services)

    effective_model = model if model is not None else spec.model

    if system_prompt is not None:
        reference = system_prompt
    else:
        reference = (
            spec.system_prompt if spec.system_prompt is not None else config.default_prompt
        )
    prompt_text = resolve_reference(config.system_prompts, reference)

    return spec, ResolvedInvocation(
        service_name=name,
        model=effective_model,
        system_prompt_text=prompt_text,
    )


class Client:
    """One configured conversation endpoint for a single invocation."""

    def __init__(self, service_name: str, driver: Driver) -> None:
        self._service_name = service_name
        self._driver = driver

    @classmethod
    def resolve(
        cls,
        service_name: str | None,
        config: Configuration,
        model: str | None = None,
        system_prompt: str | None = None,
    ) -> Client:
        """Build a client for ``service_name`` (or the default service).

        ``system_prompt`` may name an entry of ``system_prompts`` or be literal
        text. Without it, the service's own reference is used, falling back to
        ``default_prompt``.
        """

        spec, invocation = resolve_invocation(service_name, config, model, system_prompt)
        _LOGGER.debug(
            "Resolved service=%s class=%s model=%s",
            invocation.service_name,
            spec.provider_class,
            invocation.model,
        )
        driver = create_driver(
            spec.provider_class,
            spec,
            invocation.model,
            invocation.system_prompt_text,
        )
        return cls(invocation.service_name, driver)

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def model(self) -> str:
        return self._driver.model

    @property
    def system_prompt(self) -> str:
        return self._driver.system_prompt

    def complete(self, prompt: str) -> CompletionResult:
        return self._driver.complete(prompt)

    def list_models(self) -> list[str]:
        return self._driver.list_models()
