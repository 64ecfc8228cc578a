"""
Unit tests for the two authorization predicates.
"""

import uuid
from types import SimpleNamespace

import pytest

from taskboard.core.exceptions import AuthorizationError
from taskboard.core.permissions import (
    can_access_project,
    can_mutate_privileged,
    require_privileged,
    require_project_access,
)
from taskboard.models.user import UserRole


def make_user(role: UserRole = UserRole.user) -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), role=role)


def make_project(manager, members=()) -> SimpleNamespace:
    return SimpleNamespace(manager_id=manager.id, members=list(members))


class TestProjectScope:

    def test_manager_has_access_even_when_not_listed_as_member(self):
        manager = make_user()
        assert can_access_project(manager, make_project(manager)) is True

    def test_member_has_access(self):
        manager, member = make_user(), make_user()
        assert can_access_project(member, make_project(manager, [manager, member])) is True

    def test_outsider_has_no_access(self):
        manager, outsider = make_user(), make_user()
        assert can_access_project(outsider, make_project(manager, [manager])) is False

    def test_admin_role_grants_no_project_scope(self):
        manager, admin = make_user(), make_user(UserRole.admin)
        assert can_access_project(admin, make_project(manager, [manager])) is False

    def test_require_project_access_raises_403_with_message(self):
        manager, outsider = make_user(), make_user()
        with pytest.raises(AuthorizationError) as exc:
            require_project_access(outsider, make_project(manager), "Not authorized to access this project")
        assert exc.value.status_code == 403
        assert exc.value.message == "Not authorized to access this project"


class TestPrivilegedMutation:

    def test_owner_may_mutate(self):
        owner = make_user()
        assert can_mutate_privileged(owner, owner.id) is True

    def test_admin_may_mutate_anything(self):
        assert can_mutate_privileged(make_user(UserRole.admin), uuid.uuid4()) is True

    @pytest.mark.parametrize("role", [UserRole.user, UserRole.manager])
    def test_non_owner_non_admin_may_not(self, role):
        assert can_mutate_privileged(make_user(role), uuid.uuid4()) is False

    def test_require_privileged_passes_silently_for_owner(self):
        owner = make_user()
        require_privileged(owner, owner.id, "unused")

    def test_require_privileged_raises_for_member(self):
        with pytest.raises(AuthorizationError):
            require_privileged(make_user(), uuid.uuid4(), "Not authorized to delete this task")
