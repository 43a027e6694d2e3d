from __future__ import annotations

import threading
import uuid
from typing import Callable, Optional

from .state import AppState


Listener = Callable[[AppState], None]


def new_uuid() -> str:
    return str(uuid.uuid4())


class Store:
    """Holds the current AppState and applies reducer transitions to it.

    A reducer is any callable `(state, *args, **kwargs) -> AppState`. Listeners
    run after each transition that produced a new snapshot.

    Transitions are serialized: the read-reduce-commit step and its listener
    calls run under one re-entrant lock, so concurrent requests cannot drop
    each other's changes and listeners see snapshots in commit order.
    """

    def __init__(self, state: Optional[AppState] = None, *, id_factory: Callable[[], str] = new_uuid):
        self._state = state or AppState()
        self._listeners: list[Listener] = []
        self._id_factory = id_factory
        self._lock = threading.RLock()

    @property
    def state(self) -> AppState:
        return self._state

    def new_id(self) -> str:
        return self._id_factory()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def apply(self, reducer: Callable[..., AppState], *args, **kwargs) -> AppState:
        with self._lock:
            new_state = reducer(self._state, *args, **kwargs)
            if new_state is self._state:
                return new_state
            self._commit(new_state)
            return new_state

    def replace(self, state: AppState) -> None:
        """Swap in a whole snapshot (load from storage, restore a backup)."""
        with self._lock:
            self._commit(state)

    def _commit(self, state: AppState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
