"""Tests for the widget snapshot."""

from sugar_meter.domain.items import BUILT_IN_ITEMS
from sugar_meter.domain.levels import SugarLevel, ThresholdMultipliers
from sugar_meter.services.engine import SugarTrackerEngine
from sugar_meter.services.storage import SugarStore
from sugar_meter.services.widget import WidgetSnapshotService
from tests.conftest import FixedClock


def test_snapshot_matches_engine(
    engine: SugarTrackerEngine, sugar_store: SugarStore, clock: FixedClock
) -> None:
    engine.update_daily_limit(25)
    engine.update_threshold_multipliers(ThresholdMultipliers(1, 1.5, 3, 4))
    engine.log_item(BUILT_IN_ITEMS[0], grams=40)
    service = WidgetSnapshotService(sugar_store, clock, default_daily_limit=36)

    snapshot = service.load_snapshot()

    assert snapshot.day_key == "2025-03-10"
    assert snapshot.total_grams == 40
    assert snapshot.daily_limit == 25
    assert snapshot.level is engine.current_level is SugarLevel.L3
    assert snapshot.status_label == "Warning"
    assert snapshot.status_color == SugarLevel.L3.color
    assert snapshot.progress == 1.0


def test_snapshot_defaults_without_data(
    sugar_store: SugarStore, clock: FixedClock
) -> None:
    service = WidgetSnapshotService(sugar_store, clock, default_daily_limit=36)

    snapshot = service.load_snapshot()

    assert snapshot.total_grams == 0
    assert snapshot.daily_limit == 36
    assert snapshot.level is SugarLevel.L1
    assert snapshot.status_label == "In target"
    assert snapshot.progress == 0.0
