"""Dismissal state — persisted "don't show again" flags per rule identifier.

DismissalStore never caches: every lookup goes to the backend, and every
write goes straight through to it.
"""

import json
import logging
import os
import threading

logger = logging.getLogger(__name__)


class MemoryDismissalBackend:
    """Process-local key → bool store."""

    def __init__(self, initial: dict[str, bool] | None = None):
        self._lock = threading.Lock()
        self._flags: dict[str, bool] = dict(initial or {})

    def get(self, key: str) -> bool:
        with self._lock:
            return self._flags.get(key, False)

    def set(self, key: str, value: bool):
        with self._lock:
            if value:
                self._flags[key] = True
            else:
                self._flags.pop(key, None)

    def clear(self):
        with self._lock:
            self._flags.clear()


class JsonDismissalBackend:
    """Durable key → bool store backed by a JSON file.

    The file is re-read on every lookup. Writes replace the file atomically
    (temp file + rename) before returning.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> dict[str, bool]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read dismissals from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring dismissals file %s: not a JSON object", self.path)
            return {}
        return {k: True for k, v in data.items() if isinstance(k, str) and v is True}

    def _save(self, flags: dict[str, bool]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = self.path + '.tmp'
        with open(tmp, 'w', encoding='utf-8') as f:
            json.dump(flags, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str) -> bool:
        with self._lock:
            return self._load().get(key, False)

    def set(self, key: str, value: bool):
        with self._lock:
            flags = self._load()
            if value:
                flags[key] = True
            else:
                flags.pop(key, None)
            self._save(flags)

    def clear(self):
        with self._lock:
            self._save({})


class DismissalStore:
    """Answers whether a rule has been permanently dismissed by the user."""

    def __init__(self, backend=None):
        self._backend = backend if backend is not None else MemoryDismissalBackend()

    def is_dismissed(self, identifier: str) -> bool:
        return self._backend.get(identifier)

    def set_dismissed(self, identifier: str, value: bool = True):
        self._backend.set(identifier, value)
        logger.info("Dismissal for %r set to %s", identifier, value)

    def clear(self, identifier: str | None = None):
        """Forget one dismissal, or all of them when ``identifier`` is None."""
        if identifier is None:
            self._backend.clear()
            logger.info("All dismissals cleared")
        else:
            self.set_dismissed(identifier, False)
