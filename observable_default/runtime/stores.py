"""
Key-value stores read and written by persisted properties.

Only byte-level get/set by string key is required of a store; these are
reference implementations of that contract.

Example:
    Defaults.shared = Defaults.suite("SHARED")

    class Person(Observable):
        age: Annotated[int, user_default(store=".shared")] = 0
"""

import base64
import json
import logging
from pathlib import Path
from threading import Lock, RLock
from typing import Dict, Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a store is used with an invalid key or value."""


def _check(data: Optional[bytes], key: str):
    if not isinstance(key, str):
        raise StoreError(f"Store keys must be strings, got {type(key).__name__}")
    if data is not None and not isinstance(data, (bytes, bytearray)):
        raise StoreError(f"Store values must be bytes, got {type(data).__name__}")


class KeyValueStore:
    """Base class for byte-valued stores keyed by string."""

    def data(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def set(self, data: Optional[bytes], key: str) -> None:
        """Store ``data`` under ``key``; None removes the key."""
        raise NotImplementedError

    def contains(self, key: str) -> bool:
        return self.data(key) is not None

    def remove(self, key: str) -> None:
        self.set(None, key)


class MemoryStore(KeyValueStore):
    """In-process store; safe to share between threads."""

    def __init__(self, values: Optional[Dict[str, bytes]] = None, lock: Optional[RLock] = None):
        self._values: Dict[str, bytes] = values if values is not None else {}
        self._lock = lock or RLock()

    def data(self, key: str) -> Optional[bytes]:
        _check(None, key)
        with self._lock:
            return self._values.get(key)

    def set(self, data: Optional[bytes], key: str) -> None:
        _check(data, key)
        with self._lock:
            if data is None:
                self._values.pop(key, None)
            else:
                self._values[key] = bytes(data)

    def keys(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._values))

    def clear(self):
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


class Defaults(MemoryStore):
    """
    Suite-named stores.

    Instances created for the same suite name share their contents, so
    ``Defaults.suite("SHARED")`` can be called from anywhere. ``Defaults.standard``
    is the store used when a property names none.
    """

    standard: "Defaults"

    # Suite name -> (values, lock)
    _domains: Dict[Optional[str], Tuple[Dict[str, bytes], RLock]] = {}
    _domains_lock = Lock()

    def __init__(self, suite_name: Optional[str] = None):
        with Defaults._domains_lock:
            values, lock = Defaults._domains.setdefault(suite_name, ({}, RLock()))
        super().__init__(values, lock)
        self.suite_name = suite_name

    @classmethod
    def suite(cls, name: str) -> "Defaults":
        return cls(suite_name=name)

    @classmethod
    def reset_domains(cls):
        """Empty every suite (for testing)."""
        with Defaults._domains_lock:
            domains = list(Defaults._domains.values())
        for values, lock in domains:
            with lock:
                values.clear()

    def __repr__(self) -> str:
        return f"Defaults(suite_name={self.suite_name!r})"


Defaults.standard = Defaults()


class JSONFileStore(KeyValueStore):
    """Store persisted to a JSON file; values are base64 encoded."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = RLock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write({})

    def _read(self) -> Dict[str, str]:
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, values: Dict[str, str]):
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(values, f, indent=2, sort_keys=True)
        tmp.replace(self.path)

    def data(self, key: str) -> Optional[bytes]:
        _check(None, key)
        with self._lock:
            encoded = self._read().get(key)
        if encoded is None:
            return None
        return base64.b64decode(encoded)

    def set(self, data: Optional[bytes], key: str) -> None:
        _check(data, key)
        with self._lock:
            values = self._read()
            if data is None:
                values.pop(key, None)
            else:
                values[key] = base64.b64encode(bytes(data)).decode("ascii")
            self._write(values)
        logger.debug("Wrote %r to %s", key, self.path)

    def __repr__(self) -> str:
        return f"JSONFileStore({str(self.path)!r})"
