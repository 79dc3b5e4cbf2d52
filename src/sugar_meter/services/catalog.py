"""Item catalog and featured-item ranking."""

from dataclasses import dataclass, field

from sugar_meter.domain.items import SugarItem, SugarItemCategory

FEATURED_CAPACITY = 10


@dataclass
class CatalogService:
    """Holds built-in and custom items and a most-recently-used ranking.

    The featured list only ranks built-in items. Custom items are always
    appended to the quick-access list instead of competing for a slot.
    """

    built_in_items: tuple[SugarItem, ...]
    custom_items: list[SugarItem] = field(default_factory=list)
    featured_names: list[str] = field(default_factory=list)
    capacity: int = FEATURED_CAPACITY

    def __post_init__(self) -> None:
        self.custom_items = _unique_custom_items(self.built_in_items, self.custom_items)
        self.heal_featured()

    @property
    def full_catalog(self) -> list[SugarItem]:
        return [*self.built_in_items, *self.custom_items]

    @property
    def featured_items(self) -> list[SugarItem]:
        by_name = {item.storage_key: item for item in self.built_in_items}
        return [by_name[name] for name in self.featured_names if name in by_name]

    @property
    def displayed_items(self) -> list[SugarItem]:
        """Return featured items followed by every custom item."""
        return [*self.featured_items, *self.custom_items]

    def find(self, name: str) -> SugarItem | None:
        """Return the catalog item with a case-insensitive name match."""
        wanted = name.strip().casefold()
        for item in self.full_catalog:
            if item.name.casefold() == wanted:
                return item
        return None

    def items_in_category(self, category: SugarItemCategory) -> list[SugarItem]:
        return [item for item in self.full_catalog if item.category is category]

    def record_use(self, item: SugarItem) -> bool:
        """Move a built-in item to the front of the featured list.

        Returns True when the featured list changed.
        """
        if item.is_custom:
            return False
        previous = list(self.featured_names)
        names = [name for name in self.featured_names if name != item.storage_key]
        names.insert(0, item.storage_key)
        self.featured_names = names[: self.capacity]
        self.heal_featured()
        return self.featured_names != previous

    def add_custom_item(
        self,
        name: str,
        grams: int,
        category: SugarItemCategory = SugarItemCategory.CUSTOM,
    ) -> SugarItem | None:
        """Create a custom item, or return None when the input is rejected."""
        cleaned = name.strip()
        if not cleaned or grams <= 0:
            return None
        if self.find(cleaned) is not None:
            return None
        item = SugarItem(
            name=cleaned,
            sugar_grams=grams,
            is_custom=True,
            category=category,
        )
        self.custom_items.append(item)
        self.heal_featured()
        return item

    def remove_custom_item(self, item: SugarItem) -> bool:
        """Remove a custom item by name; built-in items are never removed."""
        wanted = item.name.casefold()
        remaining = [
            custom for custom in self.custom_items if custom.name.casefold() != wanted
        ]
        if len(remaining) == len(self.custom_items):
            return False
        self.custom_items = remaining
        self.heal_featured()
        return True

    def heal_featured(self) -> None:
        """Drop unknown names and backfill from the built-in order."""
        known = {item.storage_key for item in self.built_in_items}
        healed: list[str] = []
        for name in self.featured_names:
            if name in known and name not in healed:
                healed.append(name)
        for item in self.built_in_items:
            if len(healed) >= self.capacity:
                break
            if item.storage_key not in healed:
                healed.append(item.storage_key)
        self.featured_names = healed[: self.capacity]


def _unique_custom_items(
    built_in_items: tuple[SugarItem, ...], custom_items: list[SugarItem]
) -> list[SugarItem]:
    seen = {item.name.casefold() for item in built_in_items}
    unique: list[SugarItem] = []
    for item in custom_items:
        key = item.name.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique
