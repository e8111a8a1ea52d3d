"""Provider drivers and the registry that selects them."""

from askme.drivers.anthropic import AnthropicDriver
from askme.drivers.base import Driver, HttpDriver
from askme.drivers.gemini import GeminiDriver
from askme.drivers.ollama import OllamaDriver
from askme.drivers.openai import OpenAIDriver
from askme.drivers.registry import DRIVER_CLASSES, VALID_CLASSES, create_driver

__all__ = [
    "DRIVER_CLASSES",
    "VALID_CLASSES",
    "AnthropicDriver",
    "Driver",
    "GeminiDriver",
    "HttpDriver",
    "OllamaDriver",
    "OpenAIDriver",
    "create_driver",
]
