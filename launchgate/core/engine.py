"""Decision engine — picks exactly one gate state from a parsed configuration."""

import logging

from launchgate.core.dismissal import DismissalStore
from launchgate.core.models import AlertRule, GateState, RemoteConfiguration, UpdateRule
from launchgate.core.versioning import Ordering, compare

logger = logging.getLogger(__name__)


class DecisionEngine:
    """Evaluates rules in strict priority order; the first match wins.

    1. required update  — current < target, dismissal never consulted
    2. alert            — blocking, or not dismissed
    3. optional update  — not dismissed and current < target
    4. no action
    """

    def __init__(self, dismissals: DismissalStore):
        self.dismissals = dismissals

    def decide(self, config: RemoteConfiguration, current_version: str) -> GateState:
        state = self._evaluate(config, current_version)
        logger.info("Gate decision for v%s: %s", current_version, state)
        return state

    def _evaluate(self, config: RemoteConfiguration, current_version: str) -> GateState:
        required = config.required_update
        if required is not None and self.should_require_update(required, current_version):
            return GateState.required_update(required)

        alert = config.alert
        if alert is not None and self.should_show_alert(alert):
            return GateState.blocking_alert(alert)

        optional = config.optional_update
        if optional is not None and self.should_offer_update(optional, current_version):
            return GateState.optional_update(optional)

        return GateState.no_action()

    # ── Rule predicates ──────────────────────────────────────────────

    def should_require_update(self, rule: UpdateRule, current_version: str) -> bool:
        return compare(current_version, rule.target_version) is Ordering.LESS

    def should_show_alert(self, rule: AlertRule) -> bool:
        return rule.blocking or not self.dismissals.is_dismissed(rule.identifier)

    def should_offer_update(self, rule: UpdateRule, current_version: str) -> bool:
        if self.dismissals.is_dismissed(rule.identifier):
            return False
        return compare(current_version, rule.target_version) is Ordering.LESS
