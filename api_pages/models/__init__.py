"""Page server models"""

from api_pages.models.base_models import DetailedHealthResponse, HealthResponse
from api_pages.models.page import FetchResult, NavigationLink, PageContent, RenderInput

__all__ = [
    "DetailedHealthResponse",
    "HealthResponse",
    "FetchResult",
    "NavigationLink",
    "PageContent",
    "RenderInput",
]
