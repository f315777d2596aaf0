from datetime import date

import pytest

from lunchbox.core.exceptions import ValidationError
from lunchbox.services.menu_service import split_by_diet


class TestMenuService:
    """Monthly menu queries"""

    def test_only_available_items_of_the_month(self, services, menu):
        items = services.menu.get_menu_items(2024, 3)

        names = [item.name for item in items]
        assert names == ["Paneer Wrap", "Chicken Rice", "Dal Khichdi"]
        assert all(item.month == date(2024, 3, 1) for item in items)

    def test_vegetarian_filter(self, services, menu):
        veg = services.menu.get_menu_items(2024, 3, vegetarian=True)
        non_veg = services.menu.get_menu_items(2024, 3, vegetarian=False)

        assert {item.name for item in veg} == {"Paneer Wrap", "Dal Khichdi"}
        assert [item.name for item in non_veg] == ["Chicken Rice"]

    def test_unpublished_month_is_empty(self, services, menu):
        assert services.menu.get_menu_items(2024, 6) == []

    def test_invalid_month(self, services):
        with pytest.raises(ValidationError):
            services.menu.get_menu_items(2024, 0)

    def test_get_available_item_checks_month(self, services, menu):
        item = services.menu.get_available_item(menu["april"].id, date(2024, 4, 2))
        assert item.name == "Veg Pasta"

        with pytest.raises(ValidationError):
            services.menu.get_available_item(menu["april"].id, date(2024, 3, 29))

    def test_get_available_item_rejects_withdrawn(self, services, menu):
        with pytest.raises(ValidationError) as exc_info:
            services.menu.get_available_item(menu["withdrawn"].id, date(2024, 3, 15))
        assert exc_info.value.error_code == "VALIDATION_ERROR"

    def test_split_by_diet(self, menu):
        veg, non_veg = split_by_diet(list(menu.values()))

        assert len(veg) == 3
        assert len(non_veg) == 2


class TestMenuItemModel:
    """Menu month normalization"""

    def test_month_stored_as_first_day(self, repository):
        item = repository.create_menu_item({
            "name": "Idli Sambar",
            "description": "Steamed rice cakes",
            "is_vegetarian": True,
            "price": 300,
            "month": date(2024, 5, 17),
            "image_url": "https://img.example.com/idli.jpg",
        })

        assert item.month == date(2024, 5, 1)
        assert item.belongs_to(2024, 5)
        assert not item.belongs_to(2024, 6)
        assert item.is_available
