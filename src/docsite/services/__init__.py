from src.docsite.services.event_service import EventService
from src.docsite.services.project_query_service import ProjectQueryService
from src.docsite.services.project_service import ProjectService
from src.docsite.services.public_site_service import PublicSiteService

__all__ = ["EventService", "ProjectQueryService", "ProjectService", "PublicSiteService"]
