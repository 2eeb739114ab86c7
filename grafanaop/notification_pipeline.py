"""Prepare notification channel definitions for submission to Grafana."""

from __future__ import annotations

import hashlib
import json
from typing import Any

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class PipelineError(ValueError):
    """A notification channel definition could not be processed."""


def content_hash(json_text: str) -> str:
    """Return the hex SHA-256 digest of a channel definition."""
    return hashlib.sha256(json_text.encode()).hexdigest()


def _encode(channel: dict[str, Any]) -> bytes:
    text = json.dumps(channel, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in _ESCAPES.items():
        text = text.replace(char, escaped)
    return text.strip().encode()


class NotificationChannelPipeline:
    """Validate a channel definition and tell whether it changed."""

    def __init__(self, name: str, json_text: str) -> None:
        self.name = name
        self.json_text = json_text
        self.channel: dict[str, Any] = {}
        self._hash = ""

    def process(self, known_hash: str) -> bytes | None:
        """Return the channel as compact JSON, or None if it is unchanged.

        Raises PipelineError when the definition is missing or not a JSON object.
        """
        if not self.json_text:
            raise PipelineError("notificationchannel does not contain json")

        digest = content_hash(self.json_text)
        if digest == known_hash:
            self._hash = known_hash
            return None
        self._hash = digest

        try:
            channel = json.loads(self.json_text)
        except json.JSONDecodeError as exc:
            raise PipelineError(f"invalid notificationchannel json: {exc}") from exc
        if not isinstance(channel, dict):
            raise PipelineError("notificationchannel json must be an object")
        self.channel = channel
        return _encode(channel)

    def new_hash(self) -> str:
        """Return the hash computed by the last call to process."""
        return self._hash