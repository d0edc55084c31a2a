"""Thread-safe variable store shared by the steps of a test run."""

import threading
from typing import Any, Dict, Iterator, Mapping, Optional


class VariableStore:
    """
    Mapping of variable name to value, mutable over the lifetime of a test run.

    The message pipeline only reads from it; test steps write to it.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._lock = threading.RLock()
        self._values: Dict[str, Any] = dict(initial or {})

    def get(self, name: str, default: Optional[Any] = None) -> Optional[Any]:
        with self._lock:
            return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._values[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            self._values.update(values)

    def remove(self, name: str) -> None:
        with self._lock:
            self._values.pop(name, None)

    def snapshot(self) -> Dict[str, Any]:
        """Return a point-in-time copy of all variables."""
        with self._lock:
            return dict(self._values)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"VariableStore({self.snapshot()!r})"
