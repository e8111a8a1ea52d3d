"""Maps a service's declared ``class`` to its driver."""

from __future__ import annotations

import logging
from typing import Final

from askme.config import ServiceSpec
from askme.drivers.anthropic import AnthropicDriver
from askme.drivers.base import Driver, HttpDriver
from askme.drivers.gemini import GeminiDriver
from askme.drivers.ollama import OllamaDriver
from askme.drivers.openai import OpenAIDriver
from askme.errors import UnknownProviderClass

_LOGGER = logging.getLogger(__name__)

DRIVER_CLASSES: Final[dict[str, type[HttpDriver]]] = {
    "openai": OpenAIDriver,
    "ollama": OllamaDriver,
    "gemini": GeminiDriver,
    "anthropic": AnthropicDriver,
}

VALID_CLASSES: Final[tuple[str, ...]] = tuple(DRIVER_CLASSES)


def create_driver(
    class_name: str, spec: ServiceSpec, model: str | None, system_prompt: str
) -> Driver:
    """Instantiate the driver registered under ``class_name``.

    Matching is exact and case-sensitive.
    """

    driver_cls = DRIVER_CLASSES.get(class_name)
    if driver_cls is None:
        raise UnknownProviderClass(class_name, VALID_CLASSES)

    _LOGGER.debug("Creating %s driver for model %s", class_name, model)
    return driver_cls(spec, model, system_prompt)
