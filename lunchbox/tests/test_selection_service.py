import threading
from datetime import date, datetime

import pytest

from lunchbox.core.exceptions import (
    AuthorizationError,
    LockedSelectionError,
    RepositoryError,
    ValidationError,
)
from lunchbox.models.selection import SelectionOutcome


def count_rows(db, table):
    return db.fetch_one(f"SELECT COUNT(*) AS n FROM {table}")["n"]


class TestCreateSelection:
    """Creating selections"""

    def test_create_selection_success(self, services, test_db, parent, kid, menu):
        result = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )

        assert result.outcome == SelectionOutcome.CREATED
        assert result.selection.kid_id == kid.id
        assert result.selection.menu_item_id == menu["paneer"].id
        assert result.selection.date == date(2024, 3, 15)
        assert result.selection.created_at == datetime(2024, 3, 10, 9, 0)
        assert count_rows(test_db, "lunch_selections") == 1
        assert count_rows(test_db, "selection_history") == 0

    def test_create_on_existing_date_updates_instead_of_duplicating(
        self, services, test_db, parent, kid, menu
    ):
        first = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )
        second = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["chicken"].id
        )

        assert second.outcome == SelectionOutcome.UPDATED
        assert second.selection.id == first.selection.id
        assert second.selection.menu_item_id == menu["chicken"].id
        assert count_rows(test_db, "lunch_selections") == 1
        assert count_rows(test_db, "selection_history") == 1

    def test_resubmitting_same_item_is_unchanged(self, services, test_db, parent, kid, menu):
        services.selections.create_selection(parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id)
        again = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )

        assert again.outcome == SelectionOutcome.UNCHANGED
        assert count_rows(test_db, "lunch_selections") == 1
        assert count_rows(test_db, "selection_history") == 0

    @pytest.mark.parametrize("day", [
        date(2024, 3, 10),   # today
        date(2024, 3, 5),    # past
        date(2024, 3, 17),   # Sunday
    ])
    def test_unselectable_date_rejected(self, services, test_db, parent, kid, menu, day):
        with pytest.raises(ValidationError) as exc_info:
            services.selections.create_selection(parent.id, kid.id, day, menu["paneer"].id)

        assert exc_info.value.details["field"] == "date"
        assert count_rows(test_db, "lunch_selections") == 0

    def test_holiday_rejected(self, services, parent, admin_user, kid, menu):
        services.admin.create_holiday(admin_user.id, date(2024, 3, 15), "Annual day")

        with pytest.raises(ValidationError):
            services.selections.create_selection(parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id)

    @pytest.mark.parametrize("item_key", ["withdrawn", "april"])
    def test_unusable_menu_item_rejected(self, services, test_db, parent, kid, menu, item_key):
        with pytest.raises(ValidationError) as exc_info:
            services.selections.create_selection(parent.id, kid.id, date(2024, 3, 15), menu[item_key].id)

        assert exc_info.value.details["field"] == "menu_item_id"
        assert count_rows(test_db, "lunch_selections") == 0

    def test_missing_menu_item_rejected(self, services, parent, kid, menu):
        with pytest.raises(ValidationError):
            services.selections.create_selection(parent.id, kid.id, date(2024, 3, 15), 9999)

    def test_delete_then_recreate_same_date(self, services, test_db, parent, kid, menu):
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )
        services.selections.delete_selection(parent.id, kid.id, created.selection.id)

        recreated = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["dal"].id
        )

        assert recreated.outcome == SelectionOutcome.CREATED
        assert recreated.selection.id != created.selection.id
        assert count_rows(test_db, "lunch_selections") == 1


class TestLockLifecycle:
    """Selection lifecycle across the lock window"""

    def test_update_before_lock_then_locked(self, services, test_db, clock, parent, kid, menu):
        """Select on the 10th, change on the 13th, try again on the 15th"""
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )
        selection_id = created.selection.id

        clock.set(datetime(2024, 3, 13, 10, 0))
        updated = services.selections.update_selection(
            parent.id, kid.id, selection_id, menu["chicken"].id
        )

        assert updated.outcome == SelectionOutcome.UPDATED
        assert updated.selection.menu_item_id == menu["chicken"].id
        assert updated.selection.modified_at == datetime(2024, 3, 13, 10, 0)

        history = services.audit.history_for(selection_id)
        assert len(history) == 1
        assert history[0].old_menu_item_id == menu["paneer"].id
        assert history[0].new_menu_item_id == menu["chicken"].id
        assert history[0].changed_by == parent.id
        assert history[0].changed_at == datetime(2024, 3, 13, 10, 0)

        clock.set(datetime(2024, 3, 15, 8, 0))
        with pytest.raises(LockedSelectionError):
            services.selections.update_selection(parent.id, kid.id, selection_id, menu["dal"].id)
        with pytest.raises(LockedSelectionError):
            services.selections.delete_selection(parent.id, kid.id, selection_id)

        stored = services.repository.get_selection(selection_id)
        assert stored.menu_item_id == menu["chicken"].id
        assert len(services.audit.history_for(selection_id)) == 1

    def test_day_before_is_still_open(self, services, clock, parent, kid, menu):
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )

        clock.set(datetime(2024, 3, 14, 23, 59))
        result = services.selections.update_selection(
            parent.id, kid.id, created.selection.id, menu["dal"].id
        )

        assert result.outcome == SelectionOutcome.UPDATED

    def test_lock_becomes_visible_without_restart(self, services, clock, parent, kid, menu):
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )

        clock.set(datetime(2024, 3, 15, 0, 0))

        with pytest.raises(LockedSelectionError) as exc_info:
            services.selections.create_selection(parent.id, kid.id, date(2024, 3, 15), menu["dal"].id)
        assert exc_info.value.selection_id == created.selection.id

    def test_list_for_month_flags_locked_selections(self, services, clock, parent, kid, menu):
        services.selections.create_selection(parent.id, kid.id, date(2024, 3, 12), menu["paneer"].id)
        services.selections.create_selection(parent.id, kid.id, date(2024, 3, 20), menu["chicken"].id)
        services.selections.create_selection(parent.id, kid.id, date(2024, 4, 2), menu["april"].id)

        clock.set(datetime(2024, 3, 14, 12, 0))
        selections = services.selections.list_for_month(parent.id, kid.id, 2024, 3)

        assert [s.date for s in selections] == [date(2024, 3, 12), date(2024, 3, 20)]
        assert [s.locked for s in selections] == [True, False]
        assert selections[0].menu_item.name == "Paneer Wrap"
        assert selections[1].menu_item.is_vegetarian is False

    def test_history_written_only_with_update(self, services, test_db, parent, kid, menu, monkeypatch):
        """A failing audit write rolls the item change back"""
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )

        def failing_record(*args, **kwargs):
            raise RepositoryError("disk full")

        monkeypatch.setattr(services.audit, "record", failing_record)

        with pytest.raises(RepositoryError):
            services.selections.update_selection(parent.id, kid.id, created.selection.id, menu["dal"].id)

        stored = services.repository.get_selection(created.selection.id)
        assert stored.menu_item_id == menu["paneer"].id
        assert count_rows(test_db, "selection_history") == 0

    def test_concurrent_updates_keep_history_chained(self, services, parent, kid, menu):
        """Parallel updates of one selection never lose an intermediate value"""
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )
        selection_id = created.selection.id
        items = [menu["chicken"].id, menu["dal"].id]
        start = threading.Barrier(20)
        errors = []

        def worker(n):
            start.wait()
            try:
                services.selections.update_selection(parent.id, kid.id, selection_id, items[n % 2])
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        history = services.audit.history_for(selection_id)
        assert history
        assert history[0].old_menu_item_id == menu["paneer"].id
        for previous, current in zip(history, history[1:]):
            assert current.old_menu_item_id == previous.new_menu_item_id
            assert current.old_menu_item_id != current.new_menu_item_id
        stored = services.repository.get_selection(selection_id)
        assert stored.menu_item_id == history[-1].new_menu_item_id


class TestMissingSelections:
    """Operations on selections that are gone or belong elsewhere"""

    def test_update_missing_selection_is_locked(self, services, parent, kid, menu):
        with pytest.raises(LockedSelectionError):
            services.selections.update_selection(parent.id, kid.id, 424242, menu["paneer"].id)

    def test_delete_twice(self, services, parent, kid, menu):
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )
        result = services.selections.delete_selection(parent.id, kid.id, created.selection.id)
        assert result.outcome == SelectionOutcome.DELETED

        with pytest.raises(LockedSelectionError):
            services.selections.delete_selection(parent.id, kid.id, created.selection.id)

    def test_selection_of_another_kid_via_own_kid_path(self, services, parent, kid, menu):
        sibling = services.kids.create_kid(parent.id, {
            "name": "Kabir", "grade": "1A", "school": "Greenwood Primary", "roll_number": "9",
        })
        created = services.selections.create_selection(
            parent.id, sibling.id, date(2024, 3, 15), menu["paneer"].id
        )

        with pytest.raises(LockedSelectionError):
            services.selections.update_selection(parent.id, kid.id, created.selection.id, menu["dal"].id)

        assert services.repository.get_selection(created.selection.id).menu_item_id == menu["paneer"].id


class TestOwnership:
    """Only the owning user may touch a kid's selections"""

    def test_other_user_cannot_create(self, services, test_db, other_parent, kid, menu):
        with pytest.raises(AuthorizationError):
            services.selections.create_selection(other_parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id)
        assert count_rows(test_db, "lunch_selections") == 0

    def test_other_user_cannot_read_update_or_delete(self, services, parent, other_parent, kid, menu):
        created = services.selections.create_selection(
            parent.id, kid.id, date(2024, 3, 15), menu["paneer"].id
        )
        selection_id = created.selection.id

        with pytest.raises(AuthorizationError):
            services.selections.list_for_month(other_parent.id, kid.id, 2024, 3)
        with pytest.raises(AuthorizationError):
            services.selections.update_selection(other_parent.id, kid.id, selection_id, menu["dal"].id)
        with pytest.raises(AuthorizationError):
            services.selections.delete_selection(other_parent.id, kid.id, selection_id)

        stored = services.repository.get_selection(selection_id)
        assert stored.menu_item_id == menu["paneer"].id

    def test_missing_kid_reported_as_not_found(self, services, parent, menu):
        with pytest.raises(AuthorizationError):
            services.selections.create_selection(parent.id, 777, date(2024, 3, 15), menu["paneer"].id)


class TestBulkSelect:
    """Applying one item to several dates"""

    def test_partial_failure_reported_per_date(self, services, test_db, clock, parent, kid, menu):
        services.selections.create_selection(parent.id, kid.id, date(2024, 3, 12), menu["paneer"].id)
        clock.set(datetime(2024, 3, 12, 9, 0))

        results = services.selections.bulk_select(
            parent.id, kid.id,
            [date(2024, 3, 12), date(2024, 3, 13), date(2024, 3, 17), date(2024, 3, 13), date(2024, 3, 14)],
            menu["dal"].id,
        )

        assert [r.date for r in results] == [
            date(2024, 3, 12), date(2024, 3, 13), date(2024, 3, 17), date(2024, 3, 14),
        ]
        assert [r.outcome for r in results] == [
            SelectionOutcome.LOCKED,
            SelectionOutcome.CREATED,
            SelectionOutcome.INVALID,
            SelectionOutcome.CREATED,
        ]
        assert results[0].error_code == "SELECTION_LOCKED"
        assert results[2].error_code == "VALIDATION_ERROR"
        assert results[1].selection.menu_item_id == menu["dal"].id
        assert count_rows(test_db, "lunch_selections") == 3

    def test_bulk_updates_existing_dates(self, services, test_db, parent, kid, menu):
        services.selections.create_selection(parent.id, kid.id, date(2024, 3, 18), menu["paneer"].id)

        results = services.selections.bulk_select(
            parent.id, kid.id, [date(2024, 3, 18), date(2024, 3, 19)], menu["chicken"].id
        )

        assert [r.outcome for r in results] == [SelectionOutcome.UPDATED, SelectionOutcome.CREATED]
        assert count_rows(test_db, "selection_history") == 1

    def test_bulk_for_foreign_kid_rejected(self, services, test_db, other_parent, kid, menu):
        with pytest.raises(AuthorizationError):
            services.selections.bulk_select(other_parent.id, kid.id, [date(2024, 3, 18)], menu["paneer"].id)
        assert count_rows(test_db, "lunch_selections") == 0
