"""
Monthly menu data models
"""

from pydantic import Field, field_validator
from datetime import date
from .base import BaseEntity


def first_of_month(value: date) -> date:
    return value.replace(day=1)


class MonthlyMenuItem(BaseEntity):
    """Meal option published for one calendar month"""
    id: int = Field(..., description="Menu item ID")
    name: str = Field(..., description="Dish name")
    description: str = Field(..., description="Dish description")
    is_vegetarian: bool = Field(..., description="Vegetarian flag")
    price: int = Field(..., description="Price in minor currency units")
    month: date = Field(..., description="First day of the month the item belongs to")
    image_url: str = Field(..., description="Image URL")
    is_available: bool = Field(True, description="Orderable flag")

    @field_validator("month")
    @classmethod
    def normalize_month(cls, v: date) -> date:
        return first_of_month(v)

    def belongs_to(self, year: int, month: int) -> bool:
        return self.month.year == year and self.month.month == month
