"""Unit tests for provider class dispatch."""

from __future__ import annotations

import pytest

from askme.config import ServiceSpec
from askme.drivers import (
    AnthropicDriver,
    GeminiDriver,
    OllamaDriver,
    OpenAIDriver,
    VALID_CLASSES,
    create_driver,
)
from askme.errors import UnknownProviderClass


@pytest.mark.parametrize(
    ("class_name", "expected"),
    [
        ("openai", OpenAIDriver),
        ("ollama", OllamaDriver),
        ("gemini", GeminiDriver),
        ("anthropic", AnthropicDriver),
    ],
)
def test_create_driver_dispatches_by_class_name(class_name: str, expected: type) -> None:
    spec = ServiceSpec(provider_class=class_name, api_key="k")

    driver = create_driver(class_name, spec, "model", "prompt")

    assert type(driver) is expected
    assert driver.model == "model"


def test_create_driver_rejects_unknown_class() -> None:
    spec = ServiceSpec(provider_class="foo", api_key="k", model="m", url="http://x")

    with pytest.raises(UnknownProviderClass) as excinfo:
        create_driver("foo", spec, "m", "p")

    assert excinfo.value.given == "foo"
    assert excinfo.value.valid == VALID_CLASSES
    assert "openai, ollama, gemini, anthropic" in str(excinfo.value)


def test_create_driver_is_case_sensitive() -> None:
    spec = ServiceSpec(provider_class="OpenAI", api_key="k")

    with pytest.raises(UnknownProviderClass):
        create_driver("OpenAI", spec, "m", "p")
