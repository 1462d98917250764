"""Model exports.

Import from here: `from src.docsite.models import Project, Tenant`
"""

from src.docsite.models.analytics import AnalyticsEvent
from src.docsite.models.document import Document
from src.docsite.models.enums import EventType, MembershipRole
from src.docsite.models.project import Project, default_project_settings
from src.docsite.models.tenant import Tenant
from src.docsite.models.user import User, UserTenantMembership

__all__ = [
    # Enums
    "EventType",
    "MembershipRole",
    # Models
    "AnalyticsEvent",
    "Document",
    "Project",
    "Tenant",
    "User",
    "UserTenantMembership",
    # Helpers
    "default_project_settings",
]
