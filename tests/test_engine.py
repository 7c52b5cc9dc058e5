"""Tests for the decision engine priority chain and dismissal semantics."""

from __future__ import annotations

import pytest

from launchgate.core.dismissal import DismissalStore
from launchgate.core.engine import DecisionEngine
from launchgate.core.errors import InvalidVersionFormat
from launchgate.core.models import AlertRule, GateKind, GateState, RemoteConfiguration, UpdateRule

REQUIRED = UpdateRule("2.0.0")
ALERT = AlertRule("Service notice", blocking=False, identifier="notice-1")
BLOCKING_ALERT = AlertRule("Outage", blocking=True, identifier="notice-1")
OPTIONAL = UpdateRule("1.5.0")


def _decide(dismissals: DismissalStore, config: RemoteConfiguration,
            current: str = "1.0.0") -> GateState:
    return DecisionEngine(dismissals).decide(config, current)


class TestPriority:
    def test_required_wins_over_everything(self, dismissals: DismissalStore) -> None:
        config = RemoteConfiguration(REQUIRED, BLOCKING_ALERT, OPTIONAL)
        state = _decide(dismissals, config)
        assert state == GateState.required_update(REQUIRED)
        assert state.rule is REQUIRED

    def test_alert_when_no_required(self, dismissals: DismissalStore) -> None:
        state = _decide(dismissals, RemoteConfiguration(None, ALERT, OPTIONAL))
        assert state.kind is GateKind.BLOCKING_ALERT
        assert state.rule is ALERT

    def test_optional_when_no_alert(self, dismissals: DismissalStore) -> None:
        state = _decide(dismissals, RemoteConfiguration(None, None, OPTIONAL))
        assert state == GateState.optional_update(OPTIONAL)

    def test_no_action_when_empty(self, dismissals: DismissalStore) -> None:
        assert _decide(dismissals, RemoteConfiguration()) == GateState.no_action()

    def test_satisfied_required_falls_through(self, dismissals: DismissalStore) -> None:
        config = RemoteConfiguration(REQUIRED, None, OPTIONAL)
        assert _decide(dismissals, config, current="2.0.0") == GateState.no_action()

    def test_dismissed_alert_falls_through_to_optional(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed(ALERT.identifier)
        state = _decide(dismissals, RemoteConfiguration(None, ALERT, OPTIONAL))
        assert state.kind is GateKind.OPTIONAL_UPDATE


class TestVersionThresholds:
    @pytest.mark.parametrize("current, expected", [
        ("1.9.9", GateKind.REQUIRED_UPDATE),
        ("2.0", GateKind.NO_ACTION),
        ("2.0.0", GateKind.NO_ACTION),
        ("2.0.1", GateKind.NO_ACTION),
        ("10.0", GateKind.NO_ACTION),
    ])
    def test_required_needs_strictly_less(self, dismissals: DismissalStore,
                                          current: str, expected: GateKind) -> None:
        assert _decide(dismissals, RemoteConfiguration(required_update=REQUIRED), current).kind is expected

    def test_numeric_comparison(self, dismissals: DismissalStore) -> None:
        config = RemoteConfiguration(required_update=UpdateRule("10.0"))
        assert _decide(dismissals, config, current="9.0").kind is GateKind.REQUIRED_UPDATE

    def test_optional_equal_version_is_no_action(self, dismissals: DismissalStore) -> None:
        config = RemoteConfiguration(optional_update=UpdateRule("2.0.0"))
        assert _decide(dismissals, config, current="2.0.0") == GateState.no_action()

    def test_invalid_current_version_raises(self, dismissals: DismissalStore) -> None:
        with pytest.raises(InvalidVersionFormat):
            _decide(dismissals, RemoteConfiguration(required_update=REQUIRED), current="dev")


class TestDismissal:
    def test_dismissed_non_blocking_alert_suppressed(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed("notice-1")
        assert _decide(dismissals, RemoteConfiguration(alert=ALERT)) == GateState.no_action()

    def test_dismissed_blocking_alert_still_shown(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed("notice-1")
        state = _decide(dismissals, RemoteConfiguration(alert=BLOCKING_ALERT))
        assert state.kind is GateKind.BLOCKING_ALERT

    def test_required_update_ignores_dismissal(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed(REQUIRED.identifier)
        state = _decide(dismissals, RemoteConfiguration(required_update=REQUIRED))
        assert state.kind is GateKind.REQUIRED_UPDATE

    def test_dismissed_optional_update_suppressed(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed(OPTIONAL.identifier)
        assert _decide(dismissals, RemoteConfiguration(optional_update=OPTIONAL)) == GateState.no_action()

    def test_version_bump_is_a_new_rule(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed(OPTIONAL.identifier)
        bumped = UpdateRule("1.6.0")
        state = _decide(dismissals, RemoteConfiguration(optional_update=bumped))
        assert state.kind is GateKind.OPTIONAL_UPDATE

    def test_alert_keyed_by_message_without_identifier(self, dismissals: DismissalStore) -> None:
        alert = AlertRule("Please read")
        dismissals.set_dismissed("Please read")
        assert _decide(dismissals, RemoteConfiguration(alert=alert)) == GateState.no_action()

    def test_changed_identifier_is_shown_again(self, dismissals: DismissalStore) -> None:
        dismissals.set_dismissed("notice-1")
        alert = AlertRule("Service notice", identifier="notice-2")
        assert _decide(dismissals, RemoteConfiguration(alert=alert)).kind is GateKind.BLOCKING_ALERT
