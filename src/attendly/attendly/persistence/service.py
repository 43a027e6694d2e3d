from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from ..store.store import Store
from .snapshot import export_backup, import_backup


class BackupService:
    def __init__(self, store: Store, *, now: Callable[[], datetime] = datetime.now):
        self._store = store
        self._now = now

    def export(self) -> dict[str, Any]:
        return export_backup(self._store.state, now=self._now())

    def restore(self, data: Any) -> None:
        """Overwrite all current data with a validated backup."""
        self._store.replace(import_backup(data))
