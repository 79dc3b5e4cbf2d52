"""Pydantic models for persisted key-value payloads."""

from pydantic import BaseModel, Field

from sugar_meter.domain.items import SugarItemCategory


class StoredDailyLog(BaseModel):
    """Persisted grams and count for one calendar day."""

    grams: int = Field(ge=0)
    count: int = Field(ge=0)


class StoredCustomItem(BaseModel):
    """Persisted user-defined item."""

    name: str = Field(min_length=1)
    grams: int = Field(gt=0)
    category: SugarItemCategory = SugarItemCategory.CUSTOM
