"""Log history queries for calendar and streak display."""

from dataclasses import dataclass
from datetime import date, timedelta

from sugar_meter.domain.logs import DailySugarLog
from sugar_meter.services.scheduling import date_key
from sugar_meter.services.storage import SugarStore


@dataclass
class HistoryService:
    """Read-only access to per-day sugar logs."""

    store: SugarStore

    def log_for(self, day: date) -> DailySugarLog:
        return self.store.load_log(date_key(day))

    def logged_date_keys(self, min_grams: int = 1) -> set[str]:
        """Return date keys whose logged grams reach the minimum."""
        return {
            day
            for day, log in self.store.load_history().items()
            if log.grams >= min_grams
        }

    def current_streak(self, today: date) -> int:
        """Count consecutive logged days ending today or, failing that, yesterday."""
        logged = self.logged_date_keys()
        cursor = today
        if date_key(cursor) not in logged:
            cursor = today - timedelta(days=1)
            if date_key(cursor) not in logged:
                return 0
        streak = 0
        while date_key(cursor) in logged:
            streak += 1
            cursor -= timedelta(days=1)
        return streak
