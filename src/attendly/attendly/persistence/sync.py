from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.enums import SyncStatus
from ..core.exceptions import BackupFormatError
from ..store.state import AppState
from ..store.store import Store
from .repository import SnapshotRepository
from .snapshot import from_snapshot, to_snapshot

logger = logging.getLogger(__name__)


class SyncService:
    """Persists every new snapshot; failures only move the status signal.

    The store never waits on or sees a persistence failure: connection
    problems report `offline`, anything else `error`.

    Nothing is written until the stored snapshot has been read (or found
    missing). Until then each save retries the load first, so a store that
    started empty after a failed load never overwrites the user's data.
    """

    def __init__(
        self,
        repository: SnapshotRepository,
        *,
        offline_errors: tuple[type[BaseException], ...] = (ConnectionError, OSError),
    ):
        self._repository = repository
        self._offline_errors = offline_errors
        self._status = SyncStatus.IDLE
        self._last_error: Optional[str] = None
        self._loaded = False
        self._store: Optional[Store] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def status(self) -> SyncStatus:
        return self._status

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def loaded(self) -> bool:
        return self._loaded

    def _fail(self, exc: Exception) -> None:
        self._last_error = str(exc)
        if isinstance(exc, self._offline_errors):
            self._status = SyncStatus.OFFLINE
            logger.warning("Storage unreachable, working offline: %s", exc)
        else:
            self._status = SyncStatus.ERROR
            logger.exception("Failed to sync attendance data")

    def _fetch(self) -> tuple[bool, Optional[AppState]]:
        """Read the stored snapshot. Returns (readable, state or None)."""

        self._status = SyncStatus.SYNCING
        try:
            data = self._repository.load()
        except Exception as e:
            self._fail(e)
            return False, None

        if data is None:
            self._loaded = True
            self._last_error = None
            self._status = SyncStatus.IDLE
            return True, None

        try:
            state = from_snapshot(data)
        except BackupFormatError as e:
            self._last_error = str(e)
            self._status = SyncStatus.ERROR
            logger.error("Stored snapshot is unreadable, not saving over it: %s", e)
            return False, None

        self._loaded = True
        self._last_error = None
        return True, state

    def load_into(self, store: Store) -> bool:
        """Replace the store's state with the stored snapshot, if any."""

        readable, state = self._fetch()
        if not readable or state is None:
            return False
        store.replace(state)
        self._status = SyncStatus.SYNCED
        return True

    def _recover(self) -> bool:
        """Retry the initial load before the first write. True if writing is safe."""

        readable, state = self._fetch()
        if not readable:
            return False
        if state is None:
            return True

        if self._store is None:
            # nowhere to put the stored data, so writing would drop it unseen
            self._loaded = False
            self._last_error = "Stored data has not been loaded"
            self._status = SyncStatus.ERROR
            return False

        # stored data showed up after a failed load: it wins over unsynced edits
        logger.warning("Stored snapshot became readable; discarding changes made before it was loaded")
        self._store.replace(state)
        self._status = SyncStatus.SYNCED
        return False

    def save(self, state: AppState) -> None:
        if not self._loaded and not self._recover():
            return

        self._status = SyncStatus.SYNCING
        try:
            self._repository.save(to_snapshot(state))
        except Exception as e:
            self._fail(e)
            return
        self._last_error = None
        self._status = SyncStatus.SYNCED

    def attach(self, store: Store) -> None:
        if self._unsubscribe is None:
            self._store = store
            self._unsubscribe = store.subscribe(self.save)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            self._store = None
