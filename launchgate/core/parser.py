"""Configuration document parser.

Document format (all top-level keys optional, unknown keys ignored)::

    {
      "requiredUpdate": {"version": "2.1.0", "message": "..."},
      "alert": {"message": "...", "blocking": false, "identifier": "alert-2024-01"},
      "optionalUpdate": {"version": "2.0.5", "message": "..."}
    }
"""

import json
import logging

from launchgate.core.errors import InvalidVersionFormat, MalformedConfig
from launchgate.core.models import AlertRule, RemoteConfiguration, UpdateRule
from launchgate.core.versioning import parse_version

logger = logging.getLogger(__name__)

REQUIRED_UPDATE_KEY = 'requiredUpdate'
ALERT_KEY = 'alert'
OPTIONAL_UPDATE_KEY = 'optionalUpdate'


class ConfigParser:
    """Turns raw fetched bytes into a ``RemoteConfiguration``."""

    def parse(self, data: bytes) -> RemoteConfiguration:
        try:
            doc = json.loads(data)
        except (ValueError, TypeError, RecursionError) as e:
            raise MalformedConfig(f"not valid JSON: {e}") from e

        if not isinstance(doc, dict):
            raise MalformedConfig(
                f"top level must be an object, got {type(doc).__name__}"
            )

        config = RemoteConfiguration(
            required_update=self._parse_update(doc, REQUIRED_UPDATE_KEY),
            alert=self._parse_alert(doc),
            optional_update=self._parse_update(doc, OPTIONAL_UPDATE_KEY),
        )
        if config.is_empty:
            logger.debug("Parsed configuration has no rules")
        else:
            logger.debug("Parsed configuration: required=%s alert=%s optional=%s",
                         config.required_update is not None,
                         config.alert is not None,
                         config.optional_update is not None)
        return config

    # ── Rule slots ───────────────────────────────────────────────────

    @staticmethod
    def _section(doc: dict, key: str) -> dict | None:
        section = doc.get(key)
        if section is None:
            return None
        if not isinstance(section, dict):
            raise MalformedConfig(f'"{key}" must be an object')
        return section

    def _parse_update(self, doc: dict, key: str) -> UpdateRule | None:
        section = self._section(doc, key)
        if section is None:
            return None

        version = section.get('version')
        if not isinstance(version, str):
            raise MalformedConfig(f'"{key}.version" is required (string)')
        try:
            parse_version(version)
        except InvalidVersionFormat as e:
            raise MalformedConfig(f'"{key}.version": {e}') from e

        message = section.get('message', "")
        if not isinstance(message, str):
            raise MalformedConfig(f'"{key}.message" must be a string')

        return UpdateRule(target_version=version.strip(), message=message)

    def _parse_alert(self, doc: dict) -> AlertRule | None:
        section = self._section(doc, ALERT_KEY)
        if section is None:
            return None

        message = section.get('message')
        if not isinstance(message, str):
            raise MalformedConfig('"alert.message" is required (string)')

        blocking = section.get('blocking', False)
        if not isinstance(blocking, bool):
            raise MalformedConfig('"alert.blocking" must be a boolean')

        identifier = section.get('identifier', "")
        if identifier is None:
            identifier = ""
        if not isinstance(identifier, str):
            raise MalformedConfig('"alert.identifier" must be a string')

        return AlertRule(message=message, blocking=blocking, identifier=identifier)
