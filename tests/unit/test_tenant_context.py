"""Tests for caller context and action results."""

from uuid import uuid4

import pytest

from src.docsite.core.exceptions import PermissionDenied, SlugConflict
from src.docsite.core.tenant_context import TenantContext
from src.docsite.models import MembershipRole
from src.docsite.models.enums import CONTRIBUTOR_ROLES, MANAGER_ROLES
from src.docsite.schemas import ProjectActionResult

pytestmark = pytest.mark.unit


class TestTenantContext:
    def test_without_tenant(self):
        ctx = TenantContext(user_id=uuid4())

        assert ctx.has_tenant is False
        assert ctx.has_role(CONTRIBUTOR_ROLES) is False

    @pytest.mark.parametrize(
        ("role", "contributor", "manager"),
        [
            (MembershipRole.OWNER, True, True),
            (MembershipRole.ADMIN, True, True),
            (MembershipRole.MEMBER, True, False),
            (MembershipRole.VIEWER, False, False),
        ],
    )
    def test_role_gates(self, role, contributor, manager):
        ctx = TenantContext(user_id=uuid4(), tenant_id=uuid4(), role=role)

        assert ctx.has_role(CONTRIBUTOR_ROLES) is contributor
        assert ctx.has_role(MANAGER_ROLES) is manager


class TestProjectActionResult:
    def test_ok(self):
        project_id = uuid4()

        result = ProjectActionResult.ok("Done", project_id)

        assert result.success is True
        assert result.project_id == project_id
        assert result.error is None

    def test_failed_carries_code_and_message(self):
        result = ProjectActionResult.failed(SlugConflict())

        assert result.success is False
        assert result.error == "slug_conflict"
        assert result.message == SlugConflict.default_message
        assert result.project_id is None

    def test_failed_with_custom_message(self):
        result = ProjectActionResult.failed(PermissionDenied("Only owners can delete."))

        assert result.message == "Only owners can delete."
        assert result.error == "permission_denied"
