"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from lingo_live.adapters.openai_translation_client import OpenAITranslationClient
from lingo_live.adapters.supabase_history_change_feed import (
    SupabaseHistoryChangeFeed,
)
from lingo_live.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from lingo_live.adapters.supabase_identity_provider import SupabaseIdentityProvider
from lingo_live.config import Settings
from lingo_live.domain.errors import ConfigurationMissingError
from lingo_live.services.history import HistoryService
from lingo_live.services.identity import IdentityService
from lingo_live.services.translation import TranslationService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    history_service and identity_service are None when the history store is
    not configured; the widget then runs without history.
    """

    settings: Settings
    translation_service: TranslationService
    history_service: HistoryService | None
    identity_service: IdentityService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = OpenAITranslationClient.create(resolved_settings.openai_api_key)
    translation_service = TranslationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )

    history_service: HistoryService | None = None
    identity_service: IdentityService | None = None
    try:
        history_service, identity_service = _build_history_services(
            resolved_settings
        )
    except ConfigurationMissingError as exc:
        logger.warning("%s History will be disabled.", exc)

    async def close_resources() -> None:
        await openai_client.close()
        if history_service is not None:
            await history_service.change_feed.close()

    return AppContainer(
        settings=resolved_settings,
        translation_service=translation_service,
        history_service=history_service,
        identity_service=identity_service,
        close_resources=close_resources,
    )


def _build_history_services(
    settings: Settings,
) -> tuple[HistoryService, IdentityService]:
    if not settings.history_store_configured:
        raise ConfigurationMissingError("Supabase config not found in environment.")
    supabase_url = str(settings.supabase_url)
    supabase_client = create_client(supabase_url, str(settings.supabase_service_key))
    history_service = HistoryService(
        repository=SupabaseHistoryRepository(supabase_client),
        change_feed=SupabaseHistoryChangeFeed.create(
            supabase_url, str(settings.supabase_service_key)
        ),
        app_id=settings.app_id,
    )
    identity_service = IdentityService(
        SupabaseIdentityProvider.create(supabase_url, str(settings.identity_key))
    )
    return history_service, identity_service
