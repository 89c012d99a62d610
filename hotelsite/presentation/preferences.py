from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

PREFERRED_THEME_KEY = "preferredTheme"

PreferenceListener = Callable[[str, "str | None"], None]


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def subscribe(self, listener: PreferenceListener) -> Callable[[], None]: ...

    def reload(self) -> None: ...


class InMemoryPreferenceStore:
    """Per-client key/value store; every writer notifies all subscribers.

    A write that cannot be persisted raises ``OSError`` and leaves the
    stored values untouched.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._listeners: list[PreferenceListener] = []

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        if self._values.get(key) == value:
            return
        updated = {**self._values, key: value}
        self._persist(updated)
        self._values = updated
        self._emit(key, value)

    def remove(self, key: str) -> None:
        if key not in self._values:
            return
        updated = {name: item for name, item in self._values.items() if name != key}
        self._persist(updated)
        self._values = updated
        self._emit(key, None)

    def subscribe(self, listener: PreferenceListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reload(self) -> None:
        return None

    def _persist(self, values: dict[str, str]) -> None:
        return None

    def _emit(self, key: str, value: str | None) -> None:
        for listener in list(self._listeners):
            listener(key, value)


class JsonFilePreferenceStore(InMemoryPreferenceStore):
    """Durable store kept as a flat JSON object on disk.

    ``reload()`` picks up writes made by other processes sharing the file
    and notifies subscribers of every key that changed.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        super().__init__(self._read())

    @property
    def path(self) -> Path:
        return self._path

    def reload(self) -> None:
        fresh = self._read()
        previous = self._values
        self._values = fresh
        for key in sorted(set(previous) | set(fresh)):
            if previous.get(key) != fresh.get(key):
                self._emit(key, fresh.get(key))

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(
                "preferences.unreadable_file",
                extra={"event": "preferences.unreadable_file", "path": str(self._path)},
            )
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _persist(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values, sort_keys=True), encoding="utf-8")
        os.replace(tmp_path, self._path)
