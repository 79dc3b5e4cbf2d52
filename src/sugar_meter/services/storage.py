"""Typed persistence over a key-value store."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from sugar_meter.domain.errors import StorageError
from sugar_meter.domain.items import SugarItem
from sugar_meter.domain.levels import DEFAULT_MULTIPLIERS, ThresholdMultipliers
from sugar_meter.domain.logs import DailySugarLog
from sugar_meter.domain.units import SugarUnit
from sugar_meter.services.storage_models import StoredCustomItem, StoredDailyLog

DAILY_LIMIT_KEY = "dailySugarLimit"
MULTIPLIER_KEYS = (
    "thresholdMultiplierL2",
    "thresholdMultiplierL3",
    "thresholdMultiplierL4",
    "thresholdMultiplierL5",
)
LOG_HISTORY_KEY = "dailySugarLogs"
CUSTOM_ITEMS_KEY = "customSugarItems"
RECENT_ITEMS_KEY = "recentSugarItems"
LAST_RESET_KEY = "lastResetDate"
UNIT_KEY = "sugarUnit"

LEGACY_SHARED_KEYS = (DAILY_LIMIT_KEY, LOG_HISTORY_KEY)

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_LIMIT_ADAPTER = TypeAdapter(int)
_MULTIPLIER_ADAPTER = TypeAdapter(float)
_HISTORY_ADAPTER = TypeAdapter(dict[str, object])
_DAY_LOG_ADAPTER = TypeAdapter(StoredDailyLog)
_CUSTOM_ITEMS_ADAPTER = TypeAdapter(list[StoredCustomItem])
_NAMES_ADAPTER = TypeAdapter(list[str])
_DATETIME_ADAPTER = TypeAdapter(datetime)
_UNIT_ADAPTER = TypeAdapter(SugarUnit)


class KeyValueStore(Protocol):
    """Persistence interface for JSON-compatible values by key."""

    def get(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: object) -> None:
        """Store a value under a key."""


@dataclass
class SugarStore:
    """Typed accessors for every persisted key.

    Reads never raise: missing, malformed or unreadable values come back as
    defaults. Writes return False when the backing store fails.
    """

    store: KeyValueStore

    def load_daily_limit(self, default: int) -> int:
        """Return the stored daily limit, clamped to at least 1."""
        value = self._read(DAILY_LIMIT_KEY, _LIMIT_ADAPTER, default)
        return max(value, 1)

    def save_daily_limit(self, limit: int) -> bool:
        return self._write(DAILY_LIMIT_KEY, limit)

    def load_multipliers(self) -> ThresholdMultipliers:
        """Return stored multipliers, falling back per key to the defaults."""
        values = [
            self._read(key, _MULTIPLIER_ADAPTER, default)
            for key, default in zip(
                MULTIPLIER_KEYS, DEFAULT_MULTIPLIERS.as_tuple(), strict=True
            )
        ]
        return ThresholdMultipliers(*values).normalized()

    def save_multipliers(self, multipliers: ThresholdMultipliers) -> bool:
        saved = True
        for key, value in zip(MULTIPLIER_KEYS, multipliers.as_tuple(), strict=True):
            saved = self._write(key, value) and saved
        return saved

    def load_history(self) -> dict[str, DailySugarLog]:
        """Return every stored day log keyed by date string.

        Malformed day entries are skipped individually.
        """
        stored = self._read(LOG_HISTORY_KEY, _HISTORY_ADAPTER, {})
        history: dict[str, DailySugarLog] = {}
        for day, raw_entry in stored.items():
            entry = _validate(raw_entry, _DAY_LOG_ADAPTER, None)
            if entry is not None:
                history[day] = DailySugarLog(grams=entry.grams, count=entry.count)
        return history

    def load_log(self, day_key: str) -> DailySugarLog:
        return self.load_history().get(day_key, DailySugarLog.empty())

    def save_log(self, day_key: str, log: DailySugarLog) -> bool:
        """Create or overwrite the log for one day, keeping other days."""
        try:
            raw = self.store.get(LOG_HISTORY_KEY)
        except StorageError:
            _logger.warning("Failed to read log history before saving %s", day_key)
            return False
        # Other days are written back as stored, malformed or not.
        payload = dict(_validate(raw, _HISTORY_ADAPTER, {}))
        payload[day_key] = {"grams": log.grams, "count": log.count}
        return self._write(LOG_HISTORY_KEY, payload)

    def load_custom_items(self) -> list[SugarItem]:
        stored = self._read(CUSTOM_ITEMS_KEY, _CUSTOM_ITEMS_ADAPTER, [])
        return [
            SugarItem(
                name=entry.name,
                sugar_grams=entry.grams,
                is_custom=True,
                category=entry.category,
            )
            for entry in stored
        ]

    def save_custom_items(self, items: list[SugarItem]) -> bool:
        payload = [
            {
                "name": item.name,
                "grams": item.sugar_grams,
                "category": item.category.value,
            }
            for item in items
        ]
        return self._write(CUSTOM_ITEMS_KEY, payload)

    def load_recent_names(self) -> list[str]:
        return self._read(RECENT_ITEMS_KEY, _NAMES_ADAPTER, [])

    def save_recent_names(self, names: list[str]) -> bool:
        return self._write(RECENT_ITEMS_KEY, list(names))

    def load_last_reset(self) -> datetime | None:
        return self._read(LAST_RESET_KEY, _DATETIME_ADAPTER, None)

    def save_last_reset(self, moment: datetime) -> bool:
        return self._write(LAST_RESET_KEY, moment.isoformat())

    def load_unit(self) -> SugarUnit:
        return self._read(UNIT_KEY, _UNIT_ADAPTER, SugarUnit.GRAMS)

    def save_unit(self, unit: SugarUnit) -> bool:
        return self._write(UNIT_KEY, unit.value)

    def _read(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        try:
            raw = self.store.get(key)
        except StorageError:
            _logger.warning("Failed to read %s; using default", key)
            return default
        return _validate(raw, adapter, default)

    def _write(self, key: str, value: object) -> bool:
        try:
            self.store.set(key, value)
        except StorageError:
            _logger.warning("Failed to persist %s", key)
            return False
        return True


def _validate(raw: object | None, adapter: TypeAdapter[T], default: T) -> T:
    if raw is None:
        return default
    try:
        return adapter.validate_python(raw)
    except ValidationError:
        _logger.warning("Discarding malformed stored value: %r", raw)
        return default


def migrate_legacy_keys(
    shared: KeyValueStore,
    legacy: KeyValueStore,
    keys: tuple[str, ...] = LEGACY_SHARED_KEYS,
) -> list[str]:
    """Copy keys from a legacy store where the shared store has no value.

    Returns the keys that were copied.
    """
    copied: list[str] = []
    for key in keys:
        try:
            if shared.get(key) is not None:
                continue
            value = legacy.get(key)
            if value is None:
                continue
            shared.set(key, value)
        except StorageError:
            _logger.warning("Skipping migration of %s", key)
            continue
        copied.append(key)
    return copied
