"""Turn intercepted print/echo payloads into the text the host will show."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class EchoMessage:
    text: str
    chunks: list[Any]


def _strip_newline(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value


def printed_message(*values: Any) -> str:
    """Render print-style arguments the way the host prints them."""

    parts = [str(value) for value in values]
    if parts:
        parts[-1] = _strip_newline(parts[-1])
    return " ".join(parts)


def echoed_message(chunks: Any) -> EchoMessage | None:
    """Extract the text of ``[[text, highlight], ...]`` echo chunks.

    Returns ``None`` for a payload that is not a list of chunks with a string
    first item. A trailing newline on the last chunk is dropped from both the
    text and the chunks handed back to the host.
    """

    if not isinstance(chunks, (list, tuple)):
        return None
    texts: list[str] = []
    for chunk in chunks:
        if isinstance(chunk, str) or not isinstance(chunk, Sequence) or not chunk:
            return None
        if not isinstance(chunk[0], str):
            return None
        texts.append(chunk[0])

    normalized = list(chunks)
    if texts and texts[-1].endswith("\n"):
        texts[-1] = _strip_newline(texts[-1])
        last = normalized[-1]
        rebuilt = [texts[-1], *last[1:]]
        normalized[-1] = tuple(rebuilt) if isinstance(last, tuple) else rebuilt
    return EchoMessage(text="".join(texts), chunks=normalized)
