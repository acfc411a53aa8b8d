"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from greenlens.adapters.activity_api_client import HttpxActivityApiClient
from greenlens.config import Settings
from greenlens.services.history import HistoryService
from greenlens.services.pdf_export import THEMES


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    history_service: HistoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_client = HttpxActivityApiClient.create(
        base_url=resolved_settings.activity_api_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    history_service = HistoryService(
        store=api_client,
        emissions_source=api_client,
        fetch_limit=resolved_settings.activity_fetch_limit,
        timezone_name=resolved_settings.timezone,
        theme=THEMES[resolved_settings.report_theme],
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        history_service=history_service,
        close_resources=close_resources,
    )
