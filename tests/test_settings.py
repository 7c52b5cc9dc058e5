"""Tests for JSON-persisted gate settings."""

from __future__ import annotations

import json
import os
from pathlib import Path

from launchgate.config.settings import DEFAULT_DATA_DIR, GateSettings
from launchgate.core.fetcher import DEFAULT_TIMEOUT


class TestGateSettings:
    def test_defaults(self) -> None:
        settings = GateSettings()
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.dismissals_file == os.path.join(DEFAULT_DATA_DIR, "dismissals.json")
        assert settings.request_timeout == DEFAULT_TIMEOUT

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert GateSettings.load(str(tmp_path / "nope.json")) == GateSettings()

    def test_round_trip(self, tmp_path: Path) -> None:
        path = str(tmp_path / "settings.json")
        settings = GateSettings(
            config_uri="https://example.com/gate.json",
            update_uri="https://example.com/download",
            current_version="1.4.2",
            data_dir=str(tmp_path),
            request_timeout=3.5,
        )
        settings.save(path)
        assert GateSettings.load(path) == settings

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"current_version": "2.0", "theme": "dark",
                                    "data_dir": str(tmp_path)}), encoding="utf-8")
        settings = GateSettings.load(str(path))
        assert settings.current_version == "2.0"
        assert settings.dismissals_file == os.path.join(str(tmp_path), "dismissals.json")

    def test_corrupt_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("[1, 2", encoding="utf-8")
        assert GateSettings.load(str(path)) == GateSettings()

    def test_ensure_dirs(self, tmp_path: Path) -> None:
        settings = GateSettings(data_dir=str(tmp_path / "gate"))
        settings.ensure_dirs()
        assert (tmp_path / "gate" / "logs").is_dir()
