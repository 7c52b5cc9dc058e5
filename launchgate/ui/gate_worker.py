"""QThread wrapper that runs one gate check off the GUI thread."""

import asyncio
import logging

from PyQt6.QtCore import QThread, pyqtSignal

from launchgate.core.gate import LaunchGate
from launchgate.core.models import FetchErrorKind, GateState

logger = logging.getLogger(__name__)


class GateWorker(QThread):
    """Background worker for a single check.

    The gate's observer is this worker; the state is re-emitted as a signal,
    which Qt dispatches to the main thread. ``state_ready`` fires exactly once
    per check, even if the check itself blows up.
    """

    state_ready = pyqtSignal(object)    # GateState

    def __init__(self, gate: LaunchGate, parent=None):
        super().__init__(parent)
        self._gate = gate
        self._gate.set_observer(self)
        self._delivered = False

    def update_gate_state(self, state: GateState):
        self._delivered = True
        self.state_ready.emit(state)

    def check(self):
        """Start background check."""
        self.start()

    def run(self):
        """Thread entry point — one asyncio loop per check."""
        self._do_check()

    def _do_check(self):
        self._delivered = False
        try:
            asyncio.run(self._gate.check())
        except Exception as e:
            logger.exception("Gate check failed")
            if not self._delivered:
                self.update_gate_state(
                    GateState.fetch_error(FetchErrorKind.TRANSPORT_ERROR, str(e)))
