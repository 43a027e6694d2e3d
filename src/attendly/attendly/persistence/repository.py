from __future__ import annotations

from typing import Any, Optional, Protocol


class SnapshotRepository(Protocol):
    def load(self) -> Optional[dict[str, Any]]:
        """Return the stored snapshot, or None when nothing was saved yet."""

        raise NotImplementedError

    def save(self, snapshot: dict[str, Any]) -> None:
        raise NotImplementedError
