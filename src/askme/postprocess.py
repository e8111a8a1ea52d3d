"""Post-processing of raw model answers."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Final

_THINK_OPEN: Final = "<think>"
_THINK_CLOSE: Final = "</think>"

_JSON_FENCE: Final = re.compile(r"```json\s*([\s\S]*?)\s*```")
_ANY_FENCE: Final = re.compile(r"```\s*([\s\S]*?)\s*```")


@dataclass(frozen=True)
class CompletionResult:
    """Normalized answer returned by every driver."""

    answer: str
    reasoning: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"answer": self.answer, "reasoning": self.reasoning}


def split_reasoning(text: str) -> CompletionResult:
    """Separate a ``<think>...</think>`` segment from the answer text.

    Without a closing tag after the opening one the text is returned as the
    answer, untouched.
    """

    start = text.find(_THINK_OPEN)
    if start == -1:
        return CompletionResult(answer=text)

    body_start = start + len(_THINK_OPEN)
    end = text.find(_THINK_CLOSE, body_start)
    if end == -1:
        return CompletionResult(answer=text)

    reasoning = text[body_start:end].strip()
    answer = text[end + len(_THINK_CLOSE) :].strip()
    return CompletionResult(answer=answer, reasoning=reasoning)


def _parse_blocks(pattern: re.Pattern[str], text: str) -> list[Any]:
    blocks: list[Any] = []
    for match in pattern.finditer(text):
        try:
            blocks.append(json.loads(match.group(1)))
        except ValueError:
            continue
    return blocks


def extract_json_blocks(text: str) -> Any | None:
    """Return JSON payloads found in fenced code blocks.

    Blocks tagged ``json`` are preferred; untagged or differently tagged
    blocks are only considered when no tagged block parses. One payload is
    returned as-is, several as a list in order of appearance, none as ``None``.
    """

    blocks = _parse_blocks(_JSON_FENCE, text)
    if not blocks:
        blocks = _parse_blocks(_ANY_FENCE, text)

    if not blocks:
        return None
    if len(blocks) == 1:
        return blocks[0]
    return blocks
