"""Domain models for loggable sugar items."""

from dataclasses import dataclass
from enum import Enum


class SugarItemCategory(Enum):
    """Catalog category of a sugar item."""

    BAKERY = "bakery"
    DRINK = "drink"
    CANDY = "candy"
    DESSERT = "dessert"
    BREAKFAST = "breakfast"
    CONDIMENT = "condiment"
    SNACK = "snack"
    FASTFOOD = "fastfood"
    KIDS = "kids"
    CUSTOM = "custom"
    OTHER = "other"

    @property
    def title(self) -> str:
        """Return the display title for the category."""
        if self is SugarItemCategory.FASTFOOD:
            return "Fast Food"
        return self.value.capitalize()


@dataclass(frozen=True)
class SugarItem:
    """A loggable treat with its base sugar amount."""

    name: str
    sugar_grams: int
    image_name: str | None = None
    is_custom: bool = False
    category: SugarItemCategory = SugarItemCategory.OTHER

    @property
    def storage_key(self) -> str:
        """Return the stable identifier used in persisted lists."""
        return self.name


@dataclass(frozen=True)
class SizeSpec:
    """Portion size definition."""

    key: str
    label: str
    short_label: str
    multiplier: float


class SugarItemSize(Enum):
    """Portion sizes applied to an item's base grams."""

    SMALL = SizeSpec("small", "Small", "S", 0.75)
    MEDIUM = SizeSpec("medium", "Medium", "M", 1.0)
    LARGE = SizeSpec("large", "Large", "L", 1.25)

    @property
    def multiplier(self) -> float:
        return self.value.multiplier


BUILT_IN_ITEMS: tuple[SugarItem, ...] = (
    SugarItem("Donut", 22, "donut", category=SugarItemCategory.BAKERY),
    SugarItem("Can of Soda", 39, "soda", category=SugarItemCategory.DRINK),
    SugarItem("Chocolate Bar", 24, "chocolate-bar", category=SugarItemCategory.CANDY),
    SugarItem("Ice Cream Scoop", 15, "ice-cream", category=SugarItemCategory.DESSERT),
    SugarItem("Cookie", 12, "cookie", category=SugarItemCategory.BAKERY),
    SugarItem("Energy Drink", 27, "energy-drink", category=SugarItemCategory.DRINK),
    SugarItem("Bowl of Cereal", 20, "cereal", category=SugarItemCategory.BREAKFAST),
    SugarItem("Frappuccino", 45, "frappucino", category=SugarItemCategory.DRINK),
    SugarItem("Candy Pack", 30, "candy", category=SugarItemCategory.CANDY),
    SugarItem("Juice Box", 18, "juice-box", category=SugarItemCategory.KIDS),
    SugarItem("Muffin", 30, "muffin", category=SugarItemCategory.BAKERY),
    SugarItem("Slice of Cake", 35, "cake", category=SugarItemCategory.DESSERT),
    SugarItem("Flavored Yogurt", 19, "yogurt", category=SugarItemCategory.BREAKFAST),
    SugarItem("Ketchup", 4, "ketchup", category=SugarItemCategory.CONDIMENT),
    SugarItem("Granola Bar", 12, "granola-bar", category=SugarItemCategory.SNACK),
    SugarItem("Milkshake", 60, "milkshake", category=SugarItemCategory.FASTFOOD),
)
