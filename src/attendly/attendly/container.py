from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

import httpx
from mysql.connector import errors as mysql_errors

from .ai.client import GeminiClient
from .ai.service import AIService
from .attendance.service import AttendanceService
from .common.datetime_utils import today_local
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .persistence.json_file_repository import JsonFileSnapshotRepository
from .persistence.mysql_snapshot_repository import MySQLSnapshotRepository
from .persistence.repository import SnapshotRepository
from .persistence.service import BackupService
from .persistence.sync import SyncService
from .reschedule.service import RescheduleService
from .settings.service import SettingsService
from .statistics.service import StatisticsService
from .store.store import Store
from .subjects.service import SubjectService
from .timetable.service import TimetableService

OFFLINE_ERRORS = (ConnectionError, OSError, mysql_errors.InterfaceError, mysql_errors.OperationalError)


@dataclass(frozen=True)
class Container:
    store: Store
    repository: SnapshotRepository

    sync_service: SyncService
    subject_service: SubjectService
    timetable_service: TimetableService
    attendance_service: AttendanceService
    reschedule_service: RescheduleService
    settings_service: SettingsService
    statistics_service: StatisticsService
    backup_service: BackupService
    ai_service: Optional[AIService]


def build_repository(*, storage_backend: str, data_file: str, db_config: dict, owner_id: str) -> SnapshotRepository:
    if storage_backend == "file":
        return JsonFileSnapshotRepository(data_file)
    if storage_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        return MySQLSnapshotRepository(conn, owner_id=owner_id)
    raise ValidationError(f"Unknown STORAGE_BACKEND '{storage_backend}', expected 'file' or 'mysql'")


def build_container(
    *,
    repository: SnapshotRepository,
    gemini_api_key: str = "",
    gemini_model: str = "gemini-2.5-flash",
    llm_timeout: float = 25.0,
    today: Callable[[], date] = today_local,
    http_client: Optional[httpx.Client] = None,
) -> Container:
    store = Store()
    sync_service = SyncService(repository, offline_errors=OFFLINE_ERRORS)

    ai_service = None
    if gemini_api_key:
        client = GeminiClient(api_key=gemini_api_key, model=gemini_model, timeout=llm_timeout, http_client=http_client)
        ai_service = AIService(client)

    return Container(
        store=store,
        repository=repository,
        sync_service=sync_service,
        subject_service=SubjectService(store),
        timetable_service=TimetableService(store),
        attendance_service=AttendanceService(store),
        reschedule_service=RescheduleService(store),
        settings_service=SettingsService(store),
        statistics_service=StatisticsService(store, today=today),
        backup_service=BackupService(store),
        ai_service=ai_service,
    )
