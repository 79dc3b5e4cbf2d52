"""Dependency container wiring for the application."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from supabase import create_client

from sugar_meter.adapters.asyncio_scheduler import AsyncioScheduler
from sugar_meter.adapters.memory_store import InMemoryKeyValueStore
from sugar_meter.adapters.supabase_key_value_store import SupabaseKeyValueStore
from sugar_meter.app_logging import configure_logging
from sugar_meter.config import Settings, resolve_timezone
from sugar_meter.services.engine import SugarTrackerEngine
from sugar_meter.services.history import HistoryService
from sugar_meter.services.scheduling import Clock, Scheduler, SystemClock
from sugar_meter.services.storage import (
    KeyValueStore,
    SugarStore,
    migrate_legacy_keys,
)
from sugar_meter.services.widget import WidgetSnapshotService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: SugarStore
    clock: Clock
    engine: SugarTrackerEngine
    history_service: HistoryService
    widget_service: WidgetSnapshotService
    close_resources: Callable[[], None]


def build_container(
    settings: Settings | None = None,
    key_value_store: KeyValueStore | None = None,
    scheduler: Scheduler | None = None,
    legacy_store: KeyValueStore | None = None,
) -> AppContainer:
    """Create the default dependency container.

    When a legacy store is given, its daily limit and log history are copied
    into the primary store where the primary store has no value yet.
    """
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    clock = SystemClock(resolve_timezone(resolved_settings.timezone))
    primary = key_value_store
    if primary is None:
        primary = _build_key_value_store(resolved_settings)
    if legacy_store is not None:
        copied = migrate_legacy_keys(primary, legacy_store)
        if copied:
            _logger.info("Migrated legacy keys: %s", ", ".join(copied))
    store = SugarStore(primary)
    engine = SugarTrackerEngine(
        store=store,
        clock=clock,
        scheduler=scheduler or AsyncioScheduler(clock=clock),
        default_daily_limit=resolved_settings.default_daily_limit,
        visual_capacity_multiplier=resolved_settings.visual_capacity_multiplier,
        featured_capacity=resolved_settings.featured_capacity,
    )
    history_service = HistoryService(store)
    widget_service = WidgetSnapshotService(
        store=store,
        clock=clock,
        default_daily_limit=resolved_settings.default_daily_limit,
    )

    def close_resources() -> None:
        engine.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        clock=clock,
        engine=engine,
        history_service=history_service,
        widget_service=widget_service,
        close_resources=close_resources,
    )


def _build_key_value_store(settings: Settings) -> KeyValueStore:
    if not settings.uses_supabase:
        return InMemoryKeyValueStore()
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    return SupabaseKeyValueStore(
        client=client,
        device_id=settings.device_id,
        table=settings.supabase_table,
    )
