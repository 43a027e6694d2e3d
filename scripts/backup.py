"""Export the stored attendance data as a versioned JSON backup.

The file has the same shape as GET /api/backup and can be restored with
POST /api/backup.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendly.attendly.container import build_repository
from src.attendly.attendly.persistence.snapshot import export_backup, from_snapshot
from src.attendly.attendly.store.state import AppState


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    repository = build_repository(
        storage_backend=settings.STORAGE_BACKEND,
        data_file=settings.DATA_FILE,
        db_config=dict(settings.DB_CONFIG),
        owner_id=settings.SNAPSHOT_OWNER,
    )

    data = repository.load()
    state = from_snapshot(data) if data is not None else AppState()

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    now = datetime.now()
    out_file = out_dir / f"attendly_{now.strftime('%Y%m%d_%H%M%S')}.json"
    with out_file.open("w", encoding="utf-8") as f:
        json.dump(export_backup(state, now=now), f, ensure_ascii=False, indent=2)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
