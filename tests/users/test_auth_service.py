from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from timesheet_system.core.enums import Role
from timesheet_system.core.exceptions import AuthenticationError, ConflictError, ValidationError
from timesheet_system.users.model import role_for_username
from timesheet_system.users.service import AuthService, employee_id_for_username


def test_role_follows_username_convention():
    assert role_for_username("admin") == Role.ADMIN
    assert role_for_username("SiteAdmin2") == Role.ADMIN
    assert role_for_username("Anitha") == Role.EMPLOYEE


def test_register_then_login_links_new_employee(users_repo, employees_repo):
    auth = AuthService(users_repo, employees_repo)

    auth.register("Priya Devi", "pw")
    user = auth.authenticate("Priya Devi", "pw")

    assert user.role == Role.EMPLOYEE
    assert user.employee_id == employee_id_for_username("Priya Devi") == "priya-devi"
    assert employees_repo.get_by_id("priya-devi").name == "Priya Devi"


def test_login_links_existing_employee_by_name(users_repo, employees_repo):
    users_repo.create_user(username="Balaji", password_hash=generate_password_hash("pw"), role=Role.EMPLOYEE)

    user = AuthService(users_repo, employees_repo).authenticate("Balaji", "pw")

    assert user.employee_id == "e2"


def test_login_corrects_stored_role(users_repo, employees_repo):
    users_repo.create_user(username="admin", password_hash=generate_password_hash("pw"), role=Role.EMPLOYEE)

    user = AuthService(users_repo, employees_repo).authenticate("admin", "pw")

    assert user.is_admin
    assert users_repo.get_by_username("admin").role == Role.ADMIN
    assert user.employee_id is None


def test_wrong_password_and_unknown_user(users_repo, employees_repo):
    users_repo.create_user(username="Anitha", password_hash=generate_password_hash("right"), role=Role.EMPLOYEE)
    users_repo.create_user(username="legacy", password_hash="CHANGE_ME", role=Role.EMPLOYEE)
    auth = AuthService(users_repo, employees_repo)

    with pytest.raises(AuthenticationError):
        auth.authenticate("Anitha", "wrong")
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody", "x")
    with pytest.raises(AuthenticationError):
        auth.authenticate("legacy", "CHANGE_ME")


def test_register_validates_and_rejects_duplicates(users_repo, employees_repo):
    auth = AuthService(users_repo, employees_repo)
    auth.register("kamal", "pw")

    with pytest.raises(ConflictError):
        auth.register("kamal", "pw2")
    with pytest.raises(ValidationError):
        auth.register("", "pw")
