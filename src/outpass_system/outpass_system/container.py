from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .calendars.base import DayClassifier
from .calendars.factory import build_day_classifier
from .database.connection import DBConfig, DatabaseConnection
from .outpasses.memory_outpass_repository import InMemoryOutpassRepository
from .outpasses.mysql_outpass_repository import MySQLOutpassRepository
from .outpasses.repository import OutpassRepository
from .outpasses.service import OutpassService
from .outpasses.views import OutpassQueryService

STORAGE_BACKENDS = ("memory", "mysql")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    outpasses_repo: OutpassRepository
    calendar: DayClassifier

    outpass_service: OutpassService
    outpass_queries: OutpassQueryService


def build_container(
    *,
    storage_backend: str = "memory",
    db_config: Optional[dict] = None,
    holidays=None,
) -> Container:
    backend = (storage_backend or "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unsupported STORAGE_BACKEND: {storage_backend!r}")

    conn: Optional[DatabaseConnection] = None
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        outpasses_repo: OutpassRepository = MySQLOutpassRepository(conn)
    else:
        outpasses_repo = InMemoryOutpassRepository()

    calendar = build_day_classifier(holidays)
    outpass_service = OutpassService(outpasses_repo, calendar)
    outpass_queries = OutpassQueryService(outpass_service)

    return Container(
        conn=conn,
        outpasses_repo=outpasses_repo,
        calendar=calendar,
        outpass_service=outpass_service,
        outpass_queries=outpass_queries,
    )
