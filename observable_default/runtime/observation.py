"""
Change observation for observable objects.

Accessors report reads through ``access`` and wrap writes in
``with_mutation``; observers registered with ``observe`` are notified once
per completed mutation. ``track`` records which properties a function read.

Example:
    value, names = track(lambda: person.name, on_change=refresh)
    # names == {"name"}; refresh() runs after the next write to person.name
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

Observer = Callable[[Any, str], None]

_tracking = threading.local()


def _scopes() -> List[List[Tuple["ObservationRegistrar", str]]]:
    stack = getattr(_tracking, "stack", None)
    if stack is None:
        stack = _tracking.stack = []
    return stack


class ObservationRegistrar:
    """Per-object registry of observers."""

    def __init__(self):
        self._observers: Dict[int, Tuple[Optional[FrozenSet[str]], Observer]] = {}
        self._next_id = 0
        self._lock = threading.RLock()

    def access(self, subject: Any, name: str):
        """Record a read of ``name`` in every active tracking scope on this thread."""
        for scope in _scopes():
            scope.append((self, name))

    @contextmanager
    def with_mutation(self, subject: Any, name: str):
        """Notify observers of ``name`` once the wrapped write completes."""
        yield
        self._notify(subject, name)

    def observe(self, callback: Observer, names: Optional[Iterable[str]] = None) -> Callable[[], None]:
        """
        Register ``callback(subject, name)`` for mutations of ``names`` (all if None).

        Returns:
            A function that removes the registration
        """
        with self._lock:
            token = self._next_id
            self._next_id += 1
            self._observers[token] = (frozenset(names) if names is not None else None, callback)

        def dispose():
            with self._lock:
                self._observers.pop(token, None)

        return dispose

    def _notify(self, subject: Any, name: str):
        with self._lock:
            observers = list(self._observers.values())
        for names, callback in observers:
            if names is None or name in names:
                callback(subject, name)


def track(apply: Callable[[], Any], on_change: Optional[Callable[[], None]] = None) -> Tuple[Any, Set[str]]:
    """
    Run ``apply`` and collect the property names it read.

    If ``on_change`` is given it is called once, on the first later mutation
    of any property that was read.
    """
    scope: List[Tuple[ObservationRegistrar, str]] = []
    stack = _scopes()
    stack.append(scope)
    try:
        value = apply()
    finally:
        stack.pop()

    if on_change is not None and scope:
        by_registrar: Dict[int, Tuple[ObservationRegistrar, Set[str]]] = {}
        for registrar, name in scope:
            by_registrar.setdefault(id(registrar), (registrar, set()))[1].add(name)

        disposers: List[Callable[[], None]] = []
        fired = threading.Event()

        def fire(subject, name):
            if fired.is_set():
                return
            fired.set()
            for dispose in disposers:
                dispose()
            on_change()

        for registrar, names in by_registrar.values():
            disposers.append(registrar.observe(fire, names))

    return value, {name for _, name in scope}
