from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from timesheet_system.activities.memory_activity_repository import InMemoryActivityStore
from timesheet_system.activities.service import TimesheetService
from timesheet_system.activity_log.memory_activity_log_repository import InMemoryActivityLogRepository
from timesheet_system.activity_log.service import ActivityLogService
from timesheet_system.container import build_container
from timesheet_system.core.enums import Role
from timesheet_system.employees.memory_employee_repository import InMemoryEmployeeRepository
from timesheet_system.employees.model import Employee
from timesheet_system.employees.sync import RosterPolicy
from timesheet_system.main import create_app
from timesheet_system.users.memory_user_repository import InMemoryUserRepository

FIXED_NOW = "2025-01-10T09:15:00.000Z"


@pytest.fixture()
def store():
    return InMemoryActivityStore()


@pytest.fixture()
def users_repo():
    return InMemoryUserRepository()


@pytest.fixture()
def employees_repo(store, users_repo):
    repo = InMemoryEmployeeRepository(activities=store, users=users_repo)
    repo.save(Employee(id="e1", name="Anitha", created_at=FIXED_NOW))
    repo.save(Employee(id="e2", name="Balaji", created_at=FIXED_NOW))
    return repo


@pytest.fixture()
def log_repo():
    return InMemoryActivityLogRepository()


@pytest.fixture()
def log_service(log_repo):
    return ActivityLogService(log_repo, default_limit=50)


@pytest.fixture()
def timesheet(store, employees_repo, log_service):
    return TimesheetService(store, employees_repo, log_service, clock=lambda: FIXED_NOW)


@pytest.fixture()
def container():
    c = build_container(
        backend="memory",
        roster_policy=RosterPolicy(canonical_names=("Anitha", "Balaji"), aliases={"Bala": "Balaji"}),
    )
    c.employees_repo.save(Employee(id="e1", name="Anitha", created_at=FIXED_NOW))
    c.employees_repo.save(Employee(id="e2", name="Balaji", created_at=FIXED_NOW))
    c.users_repo.create_user(username="admin", password_hash=generate_password_hash("admin123"), role=Role.ADMIN)
    c.users_repo.create_user(username="Anitha", password_hash=generate_password_hash("pw"), role=Role.EMPLOYEE)
    return c


@pytest.fixture()
def app(container):
    return create_app("timesheet_system.config.testing", container=container)


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, username: str, password: str):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture()
def admin_client(client):
    resp = login(client, "admin", "admin123")
    assert resp.status_code == 200
    return client


@pytest.fixture()
def employee_client(client):
    resp = login(client, "Anitha", "pw")
    assert resp.status_code == 200
    return client
