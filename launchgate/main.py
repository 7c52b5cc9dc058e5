"""LaunchGate — entry point: run one check against the configured document."""

import argparse
import asyncio
import logging
import os
import sys

from launchgate.config.settings import GateSettings
from launchgate.core.dismissal import DismissalStore, JsonDismissalBackend
from launchgate.core.errors import InvalidLocator, InvalidVersionFormat
from launchgate.core.fetcher import HttpxTransport
from launchgate.core.gate import LaunchGate
from launchgate.core.presenter import LoggingPresenter

EXIT_OK = 0
EXIT_BAD_SETTINGS = 2


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'launchgate.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def build_gate(settings: GateSettings, presenter=None) -> LaunchGate:
    dismissals = DismissalStore(JsonDismissalBackend(settings.dismissals_file))
    return LaunchGate(
        settings.config_uri,
        settings.update_uri,
        current_version=settings.current_version,
        dismissals=dismissals,
        transport=HttpxTransport(timeout=settings.request_timeout),
        presenter=presenter,
    )


class _StateRecorder:
    """Headless observer — remembers the delivered state for the exit log."""

    def __init__(self):
        self.state = None

    def update_gate_state(self, state):
        self.state = state


def run_headless(settings: GateSettings) -> int:
    logger = logging.getLogger(__name__)
    try:
        gate = build_gate(settings)
    except (InvalidLocator, InvalidVersionFormat) as e:
        logger.error("Invalid settings: %s", e)
        return EXIT_BAD_SETTINGS
    gate.presenter = LoggingPresenter(gate.dismissals)

    recorder = _StateRecorder()
    gate.set_observer(recorder)
    asyncio.run(gate.check())
    logger.info("Gate state: %s", recorder.state)
    return EXIT_OK


def run_gui(settings: GateSettings) -> int:
    logger = logging.getLogger(__name__)
    try:
        gate = build_gate(settings)
    except (InvalidLocator, InvalidVersionFormat) as e:
        logger.error("Invalid settings: %s", e)
        return EXIT_BAD_SETTINGS

    from PyQt6.QtWidgets import QApplication
    from launchgate.ui.dialogs import DialogManager
    from launchgate.ui.gate_worker import GateWorker

    app = QApplication(sys.argv)
    app.setApplicationName('LaunchGate')

    dialogs = DialogManager(gate.dismissals)
    worker = GateWorker(gate)

    def on_state(state):
        logger.info("Gate state: %s", state)
        dialogs.present(state, gate.update_uri)
        app.quit()

    worker.state_ready.connect(on_state)
    worker.check()
    app.exec()
    worker.wait()
    return EXIT_OK


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog='launchgate',
                                     description="Run one LaunchGate check.")
    parser.add_argument('--settings', help="Path to settings.json")
    parser.add_argument('--gui', action='store_true', help="Show Qt dialogs")
    args = parser.parse_args(argv)

    settings = GateSettings.load(args.settings)
    settings.ensure_dirs()

    setup_logging(settings.data_dir)
    logger = logging.getLogger(__name__)
    logger.info("LaunchGate starting")

    if args.gui:
        return run_gui(settings)
    return run_headless(settings)


if __name__ == '__main__':
    sys.exit(main())
