"""Exception taxonomy.

Construction-time errors (``InvalidLocator``, ``InvalidVersionFormat`` for the
host's own version) propagate to the caller. Everything raised while fetching
or parsing is a ``CheckFailure`` and is turned into a
``GateState.fetch_error`` by the orchestrator.
"""

from launchgate.core.models import FetchErrorKind


class LaunchGateError(Exception):
    """Base class for all LaunchGate errors."""


class InvalidLocator(LaunchGateError):
    """A configuration or update URI is not a well-formed URI."""


class InvalidVersionFormat(LaunchGateError, ValueError):
    """A version string is not a dot-separated list of non-negative integers."""


class CheckFailure(LaunchGateError):
    """A check cycle failed before a decision could be made."""

    kind: FetchErrorKind

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.kind.value)
        self.detail = detail


class TransportError(CheckFailure):
    kind = FetchErrorKind.TRANSPORT_ERROR


class EmptyResponse(CheckFailure):
    kind = FetchErrorKind.EMPTY_RESPONSE


class EmptyBody(CheckFailure):
    kind = FetchErrorKind.EMPTY_BODY


class MalformedConfig(CheckFailure):
    kind = FetchErrorKind.MALFORMED_CONFIG
