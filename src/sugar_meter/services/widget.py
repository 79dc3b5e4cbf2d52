"""Read-only snapshot of today's intake for home-screen widgets."""

from dataclasses import dataclass
from datetime import datetime

from sugar_meter.domain.levels import RGB, SugarLevel
from sugar_meter.services import levels
from sugar_meter.services.scheduling import Clock, date_key
from sugar_meter.services.storage import SugarStore


@dataclass(frozen=True)
class WidgetSnapshot:
    """Values a widget renders without touching the engine."""

    day_key: str
    total_grams: int
    daily_limit: int
    level: SugarLevel
    status_label: str
    status_color: RGB
    progress: float


@dataclass
class WidgetSnapshotService:
    """Recomputes today's level from persisted keys only."""

    store: SugarStore
    clock: Clock
    default_daily_limit: int

    def load_snapshot(self, now: datetime | None = None) -> WidgetSnapshot:
        moment = now or self.clock.now()
        key = date_key(moment)
        log = self.store.load_log(key)
        limit = self.store.load_daily_limit(self.default_daily_limit)
        level = levels.level_for(log.grams, limit, self.store.load_multipliers())
        return WidgetSnapshot(
            day_key=key,
            total_grams=log.grams,
            daily_limit=limit,
            level=level,
            status_label=level.status_label,
            status_color=level.color,
            progress=min(log.grams / limit, 1.0),
        )
