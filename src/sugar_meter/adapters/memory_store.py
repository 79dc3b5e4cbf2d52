"""In-memory key-value store."""

import copy
from dataclasses import dataclass, field

from sugar_meter.services.storage import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store used when no backend is configured."""

    values: dict[str, object] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a copy of the stored value."""
        return copy.deepcopy(self.values.get(key))

    def set(self, key: str, value: object) -> None:
        """Store a copy of the value."""
        self.values[key] = copy.deepcopy(value)
