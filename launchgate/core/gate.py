"""LaunchGate — fetches the remote configuration and reports one gate state
per check.

Architecture:
  LaunchGate   — pure asyncio orchestration (no Qt dependency)
  GateWorker   — QThread wrapper in launchgate.ui.gate_worker

Overlapping ``check()`` calls are not serialized: each runs its own
fetch/parse/decide cycle and delivers its own state, in completion order.
Callers that need at most one check in flight must serialize themselves.
"""

import asyncio
import logging
import os
import weakref
from typing import Protocol
from urllib.parse import urlsplit

from launchgate.config.settings import DEFAULT_DATA_DIR
from launchgate.core.dismissal import DismissalStore, JsonDismissalBackend
from launchgate.core.engine import DecisionEngine
from launchgate.core.errors import CheckFailure, InvalidLocator
from launchgate.core.fetcher import FetchCoordinator, HttpxTransport
from launchgate.core.models import GateState
from launchgate.core.parser import ConfigParser
from launchgate.core.versioning import parse_version

logger = logging.getLogger(__name__)


class GateObserver(Protocol):
    def update_gate_state(self, state: GateState) -> None: ...


def validate_locator(uri: str, name: str) -> str:
    """Return ``uri`` if it is a well-formed absolute URI, else raise InvalidLocator."""
    if not isinstance(uri, str) or not uri or any(c.isspace() for c in uri):
        raise InvalidLocator(f"{name} is not a valid URI: {uri!r}")
    try:
        parts = urlsplit(uri)
    except ValueError as e:
        raise InvalidLocator(f"{name} is not a valid URI: {uri!r} ({e})") from e
    if not parts.scheme or not (parts.netloc or parts.path):
        raise InvalidLocator(f"{name} is not a valid URI: {uri!r}")
    return uri


class LaunchGate:
    """Checks the remote configuration and reports the resulting GateState.

    Args:
        config_uri: Where the configuration document lives.
        update_uri: Where the user is sent to update the app (store page, download page).
        current_version: Version of the running application.
        dismissals: Store of "don't show again" flags. Defaults to a JSON file
            in the default data directory.
        transport: Object with ``async perform_request(uri)``. Defaults to HttpxTransport.
        parser: ConfigParser instance.
        presenter: Optional Presenter that renders the state after the observer
            has been notified.
    """

    def __init__(self, config_uri: str, update_uri: str, *, current_version: str,
                 dismissals: DismissalStore | None = None,
                 transport=None,
                 parser: ConfigParser | None = None,
                 presenter=None):
        self.config_uri = validate_locator(config_uri, "config_uri")
        self.update_uri = validate_locator(update_uri, "update_uri")
        parse_version(current_version)
        self.current_version = current_version.strip()

        if dismissals is None:
            dismissals = DismissalStore(JsonDismissalBackend(
                os.path.join(DEFAULT_DATA_DIR, 'dismissals.json')))
        self.dismissals = dismissals
        self.transport = transport if transport is not None else HttpxTransport()
        self.parser = parser or ConfigParser()
        self.engine = DecisionEngine(self.dismissals)
        self.presenter = presenter

        self._observer_ref: weakref.ref | None = None
        self._tasks: set[asyncio.Task] = set()

    # ── Observer ─────────────────────────────────────────────────────

    def set_observer(self, observer: GateObserver):
        """Register the observer. Held weakly: the gate never keeps it alive."""
        self._observer_ref = weakref.ref(observer)

    def remove_observer(self):
        self._observer_ref = None

    @property
    def observer(self) -> GateObserver | None:
        return self._observer_ref() if self._observer_ref is not None else None

    # ── Check ────────────────────────────────────────────────────────

    async def check(self):
        """Run one fetch/parse/decide cycle and deliver exactly one state."""
        state = await self._evaluate()
        self._deliver(state)

    def start_check(self) -> asyncio.Task:
        """Schedule ``check()`` on the running loop without awaiting it."""
        task = asyncio.get_running_loop().create_task(self.check())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _evaluate(self) -> GateState:
        logger.info("Checking %s (current v%s)", self.config_uri, self.current_version)
        fetcher = FetchCoordinator(self.transport, self.config_uri)
        try:
            data = await fetcher.fetch()
            config = self.parser.parse(data)
        except CheckFailure as e:
            logger.warning("Check failed (%s): %s", e.kind.value, e)
            return GateState.fetch_error(e.kind, e.detail)
        return self.engine.decide(config, self.current_version)

    def _deliver(self, state: GateState):
        observer = self.observer
        if observer is None:
            logger.debug("No observer registered, dropping %s", state)
        else:
            try:
                observer.update_gate_state(state)
            except Exception:
                logger.exception("Observer failed to handle %s", state)

        if self.presenter is not None:
            try:
                self.presenter.present(state, self.update_uri)
            except Exception:
                logger.exception("Presenter failed to show %s", state)
