"""Test doubles for HTTP calls and config files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        text: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(json_data)

    def json(self) -> Any:
        return json.loads(self.text)


@dataclass
class FakeHttp:
    """Records ``requests.request`` calls and replays queued responses."""

    responses: list[FakeResponse | Exception] = field(default_factory=list)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def queue(self, *items: FakeResponse | Exception) -> None:
        self.responses.extend(items)

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@dataclass(frozen=True)
class ConfigLayers:
    global_path: Path
    cwd_path: Path
    user_path: Path


def write_yaml(path: Path, *lines: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
