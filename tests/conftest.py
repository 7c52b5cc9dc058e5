"""Shared fixtures: in-memory dismissals and scripted transports."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest

from launchgate.core.dismissal import DismissalStore, MemoryDismissalBackend
from launchgate.core.fetcher import RawResponse
from launchgate.core.models import GateState

CONFIG_URI = "https://example.com/launchgate.json"
UPDATE_URI = "itms-apps://itunes.apple.com/app/id123456789"


class ScriptedTransport:
    """Transport returning a fixed response (or raising a fixed error)."""

    def __init__(
        self,
        response: RawResponse | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: list[str] = []

    async def perform_request(self, uri: str) -> RawResponse | None:
        self.calls.append(uri)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class RecordingObserver:
    def __init__(self) -> None:
        self.states: list[GateState] = []

    def update_gate_state(self, state: GateState) -> None:
        self.states.append(state)


def json_transport(doc: Any, delay: float = 0.0) -> ScriptedTransport:
    body = json.dumps(doc).encode()
    return ScriptedTransport(RawResponse(200, body, "application/json"), delay=delay)


@pytest.fixture
def dismissals() -> DismissalStore:
    return DismissalStore(MemoryDismissalBackend())


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
