"""
Shared route dependencies
"""

from fastapi import Depends, Request

from ..core.exceptions import ServiceUnavailableError
from ..services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Service container built during startup."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ServiceUnavailableError("Service is starting")
    return container


def get_ready_container(container: ServiceContainer = Depends(get_container)) -> ServiceContainer:
    """Service container with working remote clients, or 503."""
    return container.require_ready()
