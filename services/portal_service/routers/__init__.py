"""Portal service routers package."""

from services.portal_service.routers.consumer import router as consumer_router
from services.portal_service.routers.moderator import router as moderator_router
from services.portal_service.routers.provider import router as provider_router

__all__ = ["consumer_router", "moderator_router", "provider_router"]
