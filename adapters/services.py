"""
Backend service construction.

Builds the Contentful clients and the project source from Settings,
once, at startup. The result is injected into the dispatcher through a
SiteContext rather than cached in module globals.

A client that cannot be built is logged and left out: the operations
that need it then fail with BACKEND_UNAVAILABLE while the rest keep
working.
"""

import contentful
import contentful_management

from adapters.cms import ContentfulBackend
from adapters.github import GitHubProjects
from logging_config import logger
from models import SiteContext
from settings import Settings

__all__ = [
    "build_delivery_client",
    "build_management_client",
    "build_content_backend",
    "build_site_context",
]


def build_delivery_client(settings: Settings) -> contentful.Client | None:
    """Content Delivery API client, or None without space ID + read token."""
    if not settings.can_read:
        logger.info("No Contentful delivery token: read operations unavailable")
        return None
    try:
        return contentful.Client(
            settings.space_id,
            settings.delivery_token,
            environment=settings.environment,
        )
    except Exception as e:
        logger.warning(f"Contentful delivery client could not be initialized: {e}")
        return None


def build_management_client(settings: Settings) -> contentful_management.Client | None:
    """Content Management API client, or None without space ID + write token."""
    if not settings.can_write:
        logger.info("No Contentful management token: write operations unavailable")
        return None
    try:
        return contentful_management.Client(settings.management_token)
    except Exception as e:
        logger.warning(f"Contentful management client could not be initialized: {e}")
        return None


def build_content_backend(settings: Settings) -> ContentfulBackend:
    return ContentfulBackend(
        space_id=settings.space_id,
        delivery_client=build_delivery_client(settings),
        management_client=build_management_client(settings),
        environment=settings.environment,
        locale=settings.locale,
    )


def build_site_context(settings: Settings) -> SiteContext:
    """Everything handlers need, built from one Settings object."""
    return SiteContext(
        settings=settings,
        backend=build_content_backend(settings),
        projects=GitHubProjects(token=settings.github_token),
    )
