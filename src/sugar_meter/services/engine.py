"""Daily sugar-tracking engine."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sugar_meter.domain.items import (
    BUILT_IN_ITEMS,
    SugarItem,
    SugarItemCategory,
    SugarItemSize,
)
from sugar_meter.domain.levels import (
    LevelMessage,
    LiquidPalette,
    SugarLevel,
    SugarZone,
    ThresholdMarker,
    ThresholdMultipliers,
)
from sugar_meter.domain.logs import DailySugarLog
from sugar_meter.domain.rounding import round_half_away
from sugar_meter.domain.units import SugarUnit
from sugar_meter.services import levels
from sugar_meter.services.catalog import FEATURED_CAPACITY, CatalogService
from sugar_meter.services.scheduling import (
    CancelHandle,
    Clock,
    Scheduler,
    date_key,
    is_later_day,
    next_midnight,
    start_of_day,
)
from sugar_meter.services.storage import SugarStore

DEFAULT_DAILY_LIMIT = 36
DEFAULT_VISUAL_CAPACITY_MULTIPLIER = 5.0

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogOutcome:
    """Result of logging one item."""

    grams_added: int
    total_grams: int
    log_count: int
    level: SugarLevel
    message: LevelMessage | None


@dataclass
class SugarTrackerEngine:
    """Owns today's intake, the configured limits and the item catalog.

    Operations are not reentrant and must be called from a single execution
    context. The midnight callback runs in that same context.
    """

    store: SugarStore
    clock: Clock
    scheduler: Scheduler | None = None
    built_in_items: tuple[SugarItem, ...] = BUILT_IN_ITEMS
    default_daily_limit: int = DEFAULT_DAILY_LIMIT
    visual_capacity_multiplier: float = DEFAULT_VISUAL_CAPACITY_MULTIPLIER
    featured_capacity: int = FEATURED_CAPACITY

    total_sugar_grams: int = field(init=False, default=0)
    log_count: int = field(init=False, default=0)
    daily_limit: int = field(init=False, default=DEFAULT_DAILY_LIMIT)
    threshold_multipliers: ThresholdMultipliers = field(
        init=False, default_factory=ThresholdMultipliers
    )
    last_notified_level: SugarLevel = field(init=False, default=SugarLevel.L1)
    catalog: CatalogService = field(init=False)
    _pending_message: LevelMessage | None = field(init=False, default=None)
    _warnings: list[str] = field(init=False, default_factory=list)
    _reset_handle: CancelHandle | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.visual_capacity_multiplier = max(self.visual_capacity_multiplier, 1.0)
        self.daily_limit = self.store.load_daily_limit(self.default_daily_limit)
        self.threshold_multipliers = self.store.load_multipliers()
        self.catalog = CatalogService(
            built_in_items=self.built_in_items,
            custom_items=self.store.load_custom_items(),
            featured_names=self.store.load_recent_names(),
            capacity=self.featured_capacity,
        )
        now = self.clock.now()
        today = self.store.load_log(date_key(now))
        self.total_sugar_grams = today.grams
        self.log_count = today.count
        self.ensure_daily_reset(now)

    @property
    def total_grams_today(self) -> int:
        return self.total_sugar_grams

    @property
    def log_count_today(self) -> int:
        return self.log_count

    @property
    def current_level(self) -> SugarLevel:
        return levels.level_for(
            self.total_sugar_grams, self.daily_limit, self.threshold_multipliers
        )

    @property
    def liquid_palette(self) -> LiquidPalette:
        return self.current_level.liquid_palette

    @property
    def max_visual_grams(self) -> int:
        return levels.max_visual_grams(
            self.daily_limit,
            self.threshold_multipliers,
            self.visual_capacity_multiplier,
        )

    @property
    def visual_fill_fraction(self) -> float:
        """Return how full the gauge is, capped at 1."""
        return min(self.total_sugar_grams / self.max_visual_grams, 1.0)

    @property
    def limit_progress(self) -> float:
        """Return today's grams as a ratio of the daily limit, uncapped."""
        return self.total_sugar_grams / self.daily_limit

    @property
    def recommended_fraction(self) -> float:
        return self.daily_limit / self.max_visual_grams

    @property
    def threshold_markers(self) -> list[ThresholdMarker]:
        return levels.threshold_markers(
            self.daily_limit, self.threshold_multipliers, self.max_visual_grams
        )

    @property
    def zones(self) -> list[SugarZone]:
        return levels.zones(self.daily_limit, self.threshold_multipliers)

    @property
    def displayed_items(self) -> list[SugarItem]:
        return self.catalog.displayed_items

    @property
    def full_catalog(self) -> list[SugarItem]:
        return self.catalog.full_catalog

    @property
    def pending_level_message(self) -> LevelMessage | None:
        return self._pending_message

    @property
    def pending_warnings(self) -> list[str]:
        return list(self._warnings)

    @property
    def is_reset_scheduled(self) -> bool:
        return self._reset_handle is not None

    def consume_level_message(self) -> LevelMessage | None:
        """Return the pending level-up message and clear it."""
        message = self._pending_message
        self._pending_message = None
        return message

    def consume_warnings(self) -> list[str]:
        """Return queued persistence warnings and clear them."""
        warnings = self._warnings
        self._warnings = []
        return warnings

    def items_in_category(self, category: SugarItemCategory) -> list[SugarItem]:
        return self.catalog.items_in_category(category)

    def log_item(
        self,
        item: SugarItem,
        size: SugarItemSize = SugarItemSize.MEDIUM,
        grams: int | None = None,
        now: datetime | None = None,
    ) -> LogOutcome:
        """Add an item to today's intake.

        An explicit gram amount bypasses the size multiplier. Non-positive
        amounts add nothing but still count as a log.
        """
        moment = now or self.clock.now()
        self.ensure_daily_reset(moment)

        if grams is None:
            grams = round_half_away(item.sugar_grams * size.multiplier)
        added = max(grams, 0)
        self.total_sugar_grams += added
        self.log_count += 1

        if self.catalog.record_use(item):
            self._check(
                self.store.save_recent_names(self.catalog.featured_names),
                "recent items",
            )
        self._persist_log(moment)

        level = self.current_level
        message = None
        if level.ordinal > self.last_notified_level.ordinal:
            self.last_notified_level = level
            message = levels.level_message(
                level, self.daily_limit, self.threshold_multipliers
            )
            if message is not None:
                self._pending_message = message
                _logger.info("Sugar level increased to %s", level.name)

        return LogOutcome(
            grams_added=added,
            total_grams=self.total_sugar_grams,
            log_count=self.log_count,
            level=level,
            message=message,
        )

    def reset_daily(self, now: datetime | None = None) -> None:
        """Zero today's intake; history, custom items and ranking are kept."""
        moment = now or self.clock.now()
        self.total_sugar_grams = 0
        self.log_count = 0
        self.last_notified_level = SugarLevel.L1
        self._persist_log(moment)

    def ensure_daily_reset(self, now: datetime | None = None) -> bool:
        """Reset when the calendar day has advanced since the last reset.

        Returns True when a reset was performed. A clock moved backwards
        never triggers a reset.
        """
        moment = now or self.clock.now()
        last_reset = self.store.load_last_reset()
        if last_reset is None:
            self._record_reset(moment)
            return False
        if not is_later_day(last_reset, moment):
            return False
        _logger.info("New day detected; resetting daily sugar log")
        self.reset_daily(moment)
        self._record_reset(moment)
        return True

    def schedule_next_midnight_reset(self, now: datetime | None = None) -> datetime:
        """Arm a one-shot reset at the next local midnight.

        Any previously armed reset is cancelled first. Returns the instant
        the reset is scheduled for.
        """
        if self.scheduler is None:
            raise RuntimeError("No scheduler configured for midnight resets")
        moment = now or self.clock.now()
        self.cancel_scheduled_reset()
        when = next_midnight(moment)

        def fire() -> None:
            self._reset_handle = None
            fired_at = max(self.clock.now(), when)
            self.reset_daily(fired_at)
            self._record_reset(fired_at)
            self.schedule_next_midnight_reset(fired_at)

        self._reset_handle = self.scheduler.schedule_at(when, fire)
        return when

    def cancel_scheduled_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

    def close(self) -> None:
        """Release the pending midnight timer."""
        self.cancel_scheduled_reset()

    def update_daily_limit(self, new_limit: int) -> None:
        """Change the daily limit; logged grams and notifications are kept."""
        self.daily_limit = max(new_limit, 1)
        self._check(self.store.save_daily_limit(self.daily_limit), "daily limit")

    def update_threshold_multipliers(self, multipliers: ThresholdMultipliers) -> None:
        """Store new multipliers and silently catch up the notified level."""
        self.threshold_multipliers = multipliers.normalized()
        self._check(
            self.store.save_multipliers(self.threshold_multipliers),
            "threshold multipliers",
        )
        self.last_notified_level = self.current_level

    def add_custom_item(
        self,
        name: str,
        grams: int,
        category: SugarItemCategory = SugarItemCategory.CUSTOM,
    ) -> bool:
        """Add a user-defined item; returns False when rejected."""
        item = self.catalog.add_custom_item(name, grams, category)
        if item is None:
            return False
        self._persist_catalog()
        return True

    def remove_custom_item(self, item: SugarItem) -> bool:
        if not self.catalog.remove_custom_item(item):
            return False
        self._persist_catalog()
        return True

    @property
    def unit(self) -> SugarUnit:
        return self.store.load_unit()

    def update_unit(self, unit: SugarUnit) -> None:
        self._check(self.store.save_unit(unit), "sugar unit")

    def _persist_log(self, moment: datetime) -> None:
        log = DailySugarLog(grams=self.total_sugar_grams, count=self.log_count)
        self._check(self.store.save_log(date_key(moment), log), "daily log")

    def _persist_catalog(self) -> None:
        self._check(
            self.store.save_custom_items(self.catalog.custom_items), "custom items"
        )
        self._check(
            self.store.save_recent_names(self.catalog.featured_names),
            "recent items",
        )

    def _record_reset(self, moment: datetime) -> None:
        self._check(self.store.save_last_reset(start_of_day(moment)), "reset date")

    def _check(self, saved: bool, what: str) -> None:
        if not saved:
            self._warnings.append(f"Could not save {what}; changes kept for now")
