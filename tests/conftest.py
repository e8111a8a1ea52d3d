"""Shared fixtures for askme tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import requests

from askme import config as config_module
from tests.helpers.fakes import ConfigLayers, FakeHttp


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch) -> FakeHttp:
    fake = FakeHttp()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture
def config_layers(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> ConfigLayers:
    """Redirect every config search location into ``tmp_path``."""

    layers = ConfigLayers(
        global_path=tmp_path / "etc" / "askme.yml",
        cwd_path=tmp_path / "cwd" / "askme.yml",
        user_path=tmp_path / "home" / ".config" / "askme.yml",
    )
    monkeypatch.setattr(config_module, "global_config_path", lambda: layers.global_path)
    monkeypatch.setattr(
        config_module,
        "local_config_candidates",
        lambda: [layers.cwd_path, layers.user_path],
    )
    return layers
