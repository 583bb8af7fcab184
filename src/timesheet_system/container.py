from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .activities.memory_activity_repository import InMemoryActivityStore
from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.repository import ActivityStore
from .activities.service import TimesheetService
from .activity_log.memory_activity_log_repository import InMemoryActivityLogRepository
from .activity_log.mysql_activity_log_repository import MySQLActivityLogRepository
from .activity_log.repository import ActivityLogRepository
from .activity_log.service import ActivityLogService
from .core.constants import DEFAULT_LOG_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .employees.sync import RosterPolicy, RosterSync
from .export.service import TimesheetExporter
from .timeslots.catalog import DEFAULT_CATALOG
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    activity_store: ActivityStore
    employees_repo: EmployeeRepository
    users_repo: UserRepository
    activity_log_repo: ActivityLogRepository

    auth_service: AuthService
    employee_service: EmployeeService
    activity_log_service: ActivityLogService
    timesheet_service: TimesheetService
    roster_sync: RosterSync
    exporter: TimesheetExporter


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    roster_policy: Optional[RosterPolicy] = None,
    log_limit: int = DEFAULT_LOG_LIMIT,
) -> Container:
    """Wire repositories and services. backend is "mysql" or "memory"."""
    conn: Optional[DatabaseConnection] = None
    if backend == "memory":
        activity_store = InMemoryActivityStore()
        users_repo = InMemoryUserRepository()
        employees_repo = InMemoryEmployeeRepository(activities=activity_store, users=users_repo)
        activity_log_repo = InMemoryActivityLogRepository()
    elif backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        activity_store = MySQLActivityRepository(conn)
        users_repo = MySQLUserRepository(conn)
        employees_repo = MySQLEmployeeRepository(conn)
        activity_log_repo = MySQLActivityLogRepository(conn)
    else:
        raise ValueError(f"Unknown STORE_BACKEND {backend!r}")

    auth_service = AuthService(users_repo, employees_repo)
    employee_service = EmployeeService(employees_repo)
    activity_log_service = ActivityLogService(activity_log_repo, default_limit=log_limit)
    timesheet_service = TimesheetService(
        activity_store,
        employees_repo,
        activity_log_service,
        catalog=DEFAULT_CATALOG,
    )
    roster_sync = RosterSync(employee_service, roster_policy or RosterPolicy())

    return Container(
        conn=conn,
        activity_store=activity_store,
        employees_repo=employees_repo,
        users_repo=users_repo,
        activity_log_repo=activity_log_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        activity_log_service=activity_log_service,
        timesheet_service=timesheet_service,
        roster_sync=roster_sync,
        exporter=TimesheetExporter(DEFAULT_CATALOG),
    )


def build_container_from_settings(settings: Any) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG", None),
        backend=str(getattr(settings, "STORE_BACKEND", "mysql")).lower(),
        roster_policy=RosterPolicy.from_settings(settings),
        log_limit=int(getattr(settings, "ACTIVITY_LOG_LIMIT", DEFAULT_LOG_LIMIT)),
    )
