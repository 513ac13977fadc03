"""Scripted transport that bypasses HTTP."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Mapping

from ..imagegen.errors import TransportError


@dataclass(slots=True)
class RecordedRequest:
    __test__ = False

    endpoint: str
    body: Mapping[str, Any]


class StubTransport:
    """Replay queued replies; each reply is a dict, an exception, or a delay.

    Facilitate provider and gateway tests without network calls.
    """

    __test__ = False

    def __init__(self) -> None:
        self._replies: list[Any] = []
        self.requests: list[RecordedRequest] = []

    def reply(self, payload: Mapping[str, Any]) -> "StubTransport":
        self._replies.append(dict(payload))
        return self

    def fail(self, status: int | None, payload: Mapping[str, Any] | str = "") -> "StubTransport":
        body = payload if isinstance(payload, str) else json.dumps(payload)
        message = f"HTTP {status}" if status is not None else "Connection failed"
        self._replies.append(TransportError(message, status=status, body=body))
        return self

    def hang(self, seconds: float = 3600.0) -> "StubTransport":
        self._replies.append(float(seconds))
        return self

    async def send(self, endpoint: str, body: Mapping[str, Any]) -> dict[str, Any]:
        self.requests.append(RecordedRequest(endpoint=endpoint, body=dict(body)))
        if not self._replies:
            raise AssertionError(f"No scripted reply for {endpoint}")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, float):
            await asyncio.sleep(reply)
            return {}
        return reply
