"""Host settings — persistence via JSON."""

import json
import logging
import os
from dataclasses import dataclass, asdict

from launchgate.core.fetcher import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(os.environ.get('LOCALAPPDATA', '.'), 'LaunchGate')


@dataclass
class GateSettings:
    """Persistent gate settings."""
    # Locators
    config_uri: str = ""
    update_uri: str = ""

    # Host application
    current_version: str = ""

    # Storage
    data_dir: str = ""
    dismissals_file: str = ""

    # Network
    request_timeout: float = DEFAULT_TIMEOUT   # seconds

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR
        if not self.dismissals_file:
            self.dismissals_file = os.path.join(self.data_dir, 'dismissals.json')

    @staticmethod
    def load(path: str | None = None) -> 'GateSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'settings.json')

        if not os.path.isfile(path):
            logger.info("No settings file, using defaults")
            return GateSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = GateSettings(**{k: v for k, v in data.items()
                                       if k in GateSettings.__dataclass_fields__})
            logger.info("Loaded settings from %s", path)
            return settings
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load settings: %s", e)
            return GateSettings()

    def save(self, path: str | None = None):
        """Save settings to JSON."""
        if path is None:
            path = os.path.join(self.data_dir, 'settings.json')

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self), f, indent=2)
            logger.info("Saved settings to %s", path)
        except OSError as e:
            logger.warning("Failed to save settings: %s", e)

    def ensure_dirs(self):
        """Create data directories if they don't exist."""
        os.makedirs(self.data_dir, exist_ok=True)
        os.makedirs(os.path.join(self.data_dir, 'logs'), exist_ok=True)
