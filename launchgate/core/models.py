"""Gate data models — parsed configuration rules and check outcomes."""

from dataclasses import dataclass, field
from enum import Enum


class FetchErrorKind(Enum):
    """Why a check cycle ended before a decision could be made."""

    TRANSPORT_ERROR = "transport_error"
    EMPTY_RESPONSE = "empty_response"
    EMPTY_BODY = "empty_body"
    MALFORMED_CONFIG = "malformed_config"


class GateKind(Enum):
    REQUIRED_UPDATE = "required_update"
    BLOCKING_ALERT = "blocking_alert"
    OPTIONAL_UPDATE = "optional_update"
    NO_ACTION = "no_action"
    FETCH_ERROR = "fetch_error"


@dataclass(frozen=True)
class UpdateRule:
    """The app should be at least ``target_version``."""

    target_version: str
    message: str = ""

    @property
    def identifier(self) -> str:
        # Dismissal key changes with the version, so a bump is a new rule
        return f"update-{self.target_version}"


@dataclass(frozen=True)
class AlertRule:
    """Free-form message; ``blocking`` alerts cannot be dismissed for good."""

    message: str
    blocking: bool = False
    identifier: str = ""

    def __post_init__(self):
        if not self.identifier:
            object.__setattr__(self, 'identifier', self.message)


@dataclass(frozen=True)
class RemoteConfiguration:
    """Parsed configuration document. ``None`` means the category is inactive."""

    required_update: UpdateRule | None = None
    alert: AlertRule | None = None
    optional_update: UpdateRule | None = None

    @property
    def is_empty(self) -> bool:
        return (self.required_update is None
                and self.alert is None
                and self.optional_update is None)


@dataclass(frozen=True)
class GateState:
    """The single outcome of one check cycle.

    ``rule`` is the rule that triggered the state (if any); ``error`` and
    ``detail`` are only set for ``FETCH_ERROR``. Two states are equal when
    their kind and error kind match.
    """

    kind: GateKind
    rule: UpdateRule | AlertRule | None = field(default=None, compare=False)
    error: FetchErrorKind | None = None
    detail: str = field(default="", compare=False)

    @classmethod
    def required_update(cls, rule: UpdateRule) -> 'GateState':
        return cls(GateKind.REQUIRED_UPDATE, rule=rule)

    @classmethod
    def blocking_alert(cls, rule: AlertRule) -> 'GateState':
        return cls(GateKind.BLOCKING_ALERT, rule=rule)

    @classmethod
    def optional_update(cls, rule: UpdateRule) -> 'GateState':
        return cls(GateKind.OPTIONAL_UPDATE, rule=rule)

    @classmethod
    def no_action(cls) -> 'GateState':
        return cls(GateKind.NO_ACTION)

    @classmethod
    def fetch_error(cls, error: FetchErrorKind, detail: str = "") -> 'GateState':
        return cls(GateKind.FETCH_ERROR, error=error, detail=detail)

    def __str__(self) -> str:
        if self.kind is GateKind.FETCH_ERROR:
            suffix = f": {self.detail}" if self.detail else ""
            return f"{self.kind.value}({self.error.value}){suffix}"
        return self.kind.value
