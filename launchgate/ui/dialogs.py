"""Gate dialogs — required update, alert, optional update."""

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QMessageBox

from launchgate.branding import AppBranding
from launchgate.core.dismissal import DismissalStore
from launchgate.core.models import AlertRule, GateState, UpdateRule
from launchgate.core.presenter import Presenter, UserChoice


class DialogManager(Presenter):
    """Shows modal message boxes and records the user's choice."""

    def __init__(self, dismissals: DismissalStore, parent=None):
        super().__init__(dismissals)
        self._parent = parent

    def open_destination(self, destination_uri: str):
        QDesktopServices.openUrl(QUrl(destination_uri))

    def show_required(self, rule: UpdateRule, destination_uri: str):
        text = rule.message or f"Version {rule.target_version} is required to continue."
        box = self._make_box(QMessageBox.Icon.Critical, "Update Required", text)
        update_btn = box.addButton("Update", QMessageBox.ButtonRole.AcceptRole)
        box.exec()
        if box.clickedButton() == update_btn:
            self.record_choice(GateState.required_update(rule), UserChoice.UPDATE,
                               destination_uri)

    def show_alert(self, rule: AlertRule, blocking: bool):
        box = self._make_box(QMessageBox.Icon.Information, "Alert", rule.message)
        box.addButton("OK", QMessageBox.ButtonRole.AcceptRole)
        dont_show_btn = None
        if not blocking:
            dont_show_btn = box.addButton("Don't Show Again",
                                          QMessageBox.ButtonRole.RejectRole)
        box.exec()
        if dont_show_btn is not None and box.clickedButton() == dont_show_btn:
            self.record_choice(GateState.blocking_alert(rule), UserChoice.DONT_SHOW_AGAIN)

    def show_optional(self, rule: UpdateRule, destination_uri: str):
        text = rule.message or f"Version {rule.target_version} is available."
        box = self._make_box(QMessageBox.Icon.Question, "Update Available", text)
        update_btn = box.addButton("Update", QMessageBox.ButtonRole.AcceptRole)
        box.addButton("Later", QMessageBox.ButtonRole.RejectRole)
        dont_show_btn = box.addButton("Don't Show Again",
                                      QMessageBox.ButtonRole.DestructiveRole)
        box.exec()

        state = GateState.optional_update(rule)
        clicked = box.clickedButton()
        if clicked == update_btn:
            self.record_choice(state, UserChoice.UPDATE, destination_uri)
        elif clicked == dont_show_btn:
            self.record_choice(state, UserChoice.DONT_SHOW_AGAIN)

    def _make_box(self, icon, title: str, text: str) -> QMessageBox:
        box = QMessageBox(self._parent)
        box.setIcon(icon)
        box.setWindowTitle(f"{AppBranding.dialog_title()} — {title}")
        box.setText(text)
        return box
