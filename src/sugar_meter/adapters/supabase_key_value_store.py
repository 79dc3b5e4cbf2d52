"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from sugar_meter.domain.errors import StorageError
from sugar_meter.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores one JSON value per (device, key) row."""

    client: Client
    device_id: str
    table: str = "sugar_meter_kv"

    def get(self, key: str) -> object | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("device_id", self.device_id)
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Failed to read {key}") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Insert or replace the value for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "device_id": self.device_id,
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="device_id,key",
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Failed to write {key}") from exc
