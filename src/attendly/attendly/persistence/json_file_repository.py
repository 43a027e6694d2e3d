from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from .repository import SnapshotRepository


class JsonFileSnapshotRepository(SnapshotRepository):
    """Local storage: one JSON document on disk."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    def load(self) -> Optional[dict[str, Any]]:
        if not self._path.exists():
            return None
        with self._path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, snapshot: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # each write gets its own temp file in the target directory so os.replace stays atomic
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=self._path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp = Path(f.name)
            try:
                json.dump(snapshot, f, ensure_ascii=False, indent=2)
            except Exception:
                f.close()
                tmp.unlink(missing_ok=True)
                raise
        os.replace(tmp, self._path)
