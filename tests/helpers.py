"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.docsite.core.security import create_access_token
from src.docsite.core.tenant_context import TenantContext
from src.docsite.models import (
    AnalyticsEvent,
    Document,
    EventType,
    MembershipRole,
    Project,
    Tenant,
    User,
    UserTenantMembership,
)
from src.docsite.repositories import (
    AnalyticsEventRepository,
    DocumentRepository,
    ProjectRepository,
    TenantRepository,
)
from src.docsite.services import (
    EventService,
    ProjectQueryService,
    ProjectService,
    PublicSiteService,
)
from tests.factories import (
    DocumentFactory,
    ProjectFactory,
    TenantFactory,
    UserFactory,
    UserTenantMembershipFactory,
    utc_now,
)


async def create_tenant(session: AsyncSession, **tenant_kwargs) -> Tenant:
    """Create and commit a tenant."""
    tenant = TenantFactory.build(**tenant_kwargs)
    session.add(tenant)
    await session.commit()
    return tenant


async def create_user_with_membership(
    session: AsyncSession,
    tenant: Tenant,
    role: MembershipRole = MembershipRole.OWNER,
    **user_kwargs,
) -> tuple[User, UserTenantMembership]:
    """Create a user and their membership in a tenant.

    Args:
        session: Database session
        tenant: Tenant to create membership in
        role: Role for the membership (default: OWNER)
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        Tuple of (user, membership)
    """
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.flush()

    membership = UserTenantMembershipFactory.build(
        user_id=user.id,
        tenant_id=tenant.id,
        role=role.value,
    )
    session.add(membership)
    await session.commit()

    return user, membership


async def create_project(session: AsyncSession, tenant: Tenant, **project_kwargs) -> Project:
    """Create and commit a project owned by ``tenant``."""
    project = ProjectFactory.build(tenant_id=tenant.id, **project_kwargs)
    session.add(project)
    await session.commit()
    return project


async def create_document(session: AsyncSession, project: Project, **document_kwargs) -> Document:
    """Create and commit a document inside ``project``."""
    document = DocumentFactory.build(
        tenant_id=project.tenant_id,
        project_id=project.id,
        **document_kwargs,
    )
    session.add(document)
    await session.commit()
    return document


async def create_page_view(
    session: AsyncSession,
    project: Project,
    document: Document | None = None,
    **event_kwargs,
) -> AnalyticsEvent:
    """Create and commit a page view event."""
    event_kwargs.setdefault("created_at", utc_now())
    event = AnalyticsEvent(
        tenant_id=project.tenant_id,
        project_id=project.id,
        document_id=document.id if document else None,
        type=EventType.PAGE_VIEW.value,
        **event_kwargs,
    )
    session.add(event)
    await session.commit()
    return event


def make_context(
    user: User,
    tenant: Tenant | None = None,
    role: MembershipRole | None = MembershipRole.OWNER,
) -> TenantContext:
    """Build a caller context as the tenant resolver would."""
    if tenant is None:
        return TenantContext(user_id=user.id)
    return TenantContext(user_id=user.id, tenant_id=tenant.id, role=role)


def auth_headers(user: User, tenant: Tenant | None = None) -> dict[str, str]:
    """Authorization header with an access token for ``user``."""
    token = create_access_token(user.id, tenant.id if tenant else None)
    return {"Authorization": f"Bearer {token}"}


def build_project_service(session: AsyncSession, **kwargs) -> ProjectService:
    """Wire a ProjectService the way the API dependencies do."""
    events = EventService(AnalyticsEventRepository(session), session)
    return ProjectService(
        ProjectRepository(session),
        DocumentRepository(session),
        events,
        session,
        **kwargs,
    )


def build_query_service(session: AsyncSession) -> ProjectQueryService:
    return ProjectQueryService(
        ProjectRepository(session),
        DocumentRepository(session),
        AnalyticsEventRepository(session),
    )


def build_public_site_service(session: AsyncSession) -> PublicSiteService:
    return PublicSiteService(
        TenantRepository(session),
        ProjectRepository(session),
        DocumentRepository(session),
        EventService(AnalyticsEventRepository(session), session),
    )
