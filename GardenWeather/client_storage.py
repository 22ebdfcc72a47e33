"""Small persistent key-value store for client-side state."""
import json
import logging
import os
from typing import Any, Dict, Optional


class ClientStorage:
    """
    JSON-file-backed string store.

    The file is read once when the store is created; every change is written
    straight back to disk.
    """

    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logging.warning(f"Ignoring unreadable client storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logging.warning(f"Ignoring malformed client storage {self.path}")
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def _flush(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._data = {}
        self._flush()

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logging.warning(f"Stored value for {key!r} is not valid JSON")
            return default

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value))
