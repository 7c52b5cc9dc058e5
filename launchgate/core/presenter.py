"""Presentation contract — turns a gate state into a dialog and applies the
user's choice.

Presenter has no UI dependency; subclasses do the rendering
(see launchgate.ui.dialogs.DialogManager for the PyQt6 one).
"""

import logging
import webbrowser
from enum import Enum

from launchgate.core.dismissal import DismissalStore
from launchgate.core.models import AlertRule, GateKind, GateState, UpdateRule

logger = logging.getLogger(__name__)


class UserChoice(Enum):
    UPDATE = "update"
    LATER = "later"
    DONT_SHOW_AGAIN = "dont_show_again"


class Presenter:
    """Base presenter: dispatches states to ``show_*`` and records choices."""

    def __init__(self, dismissals: DismissalStore):
        self.dismissals = dismissals

    def present(self, state: GateState, destination_uri: str):
        if state.kind is GateKind.REQUIRED_UPDATE:
            self.show_required(state.rule, destination_uri)
        elif state.kind is GateKind.BLOCKING_ALERT:
            self.show_alert(state.rule, state.rule.blocking)
        elif state.kind is GateKind.OPTIONAL_UPDATE:
            self.show_optional(state.rule, destination_uri)
        # NO_ACTION and FETCH_ERROR have nothing to show

    def show_required(self, rule: UpdateRule, destination_uri: str):
        raise NotImplementedError

    def show_alert(self, rule: AlertRule, blocking: bool):
        raise NotImplementedError

    def show_optional(self, rule: UpdateRule, destination_uri: str):
        raise NotImplementedError

    def open_destination(self, destination_uri: str):
        webbrowser.open(destination_uri)

    def record_choice(self, state: GateState, choice: UserChoice,
                      destination_uri: str | None = None):
        """Apply what the user picked in the dialog shown for ``state``."""
        if choice is UserChoice.DONT_SHOW_AGAIN:
            if self.is_dismissible(state):
                self.dismissals.set_dismissed(state.rule.identifier, True)
            else:
                logger.warning("%s cannot be dismissed", state)
        elif choice is UserChoice.UPDATE:
            if destination_uri:
                logger.info("Opening update destination %s", destination_uri)
                self.open_destination(destination_uri)
            else:
                logger.warning("Update chosen but no destination URI given")

    @staticmethod
    def is_dismissible(state: GateState) -> bool:
        if state.kind is GateKind.OPTIONAL_UPDATE:
            return True
        if state.kind is GateKind.BLOCKING_ALERT:
            return not state.rule.blocking
        return False


class LoggingPresenter(Presenter):
    """Headless presenter: reports dialogs through the log, never prompts."""

    def show_required(self, rule: UpdateRule, destination_uri: str):
        logger.warning("Update to v%s is required: %s %s",
                       rule.target_version, rule.message, destination_uri)

    def show_alert(self, rule: AlertRule, blocking: bool):
        logger.warning("Alert%s: %s", " (blocking)" if blocking else "", rule.message)

    def show_optional(self, rule: UpdateRule, destination_uri: str):
        logger.info("Update to v%s is available: %s %s",
                    rule.target_version, rule.message, destination_uri)
