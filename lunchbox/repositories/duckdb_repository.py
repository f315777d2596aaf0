"""
DuckDB implementation of the repository interface.
"""

import datetime as dt
from typing import Any, Dict, List, Optional

from ..core.database import DatabaseManager
from ..models.holiday import Holiday
from ..models.kid import Kid
from ..models.menu import MonthlyMenuItem
from ..models.selection import LunchSelection, LunchSelectionDetail, SelectionHistory
from ..models.user import User
from .base import LunchRepository

USER_COLUMNS = "id, username, password, name, email, gender, profile_picture, is_admin, created_at"
KID_COLUMNS = "id, name, grade, school, roll_number, gender, profile_picture, user_id"
MENU_COLUMNS = 'id, name, description, is_vegetarian, price, "month", image_url, is_available'
SELECTION_COLUMNS = "id, kid_id, menu_item_id, date, created_at, modified_at"
HISTORY_COLUMNS = "id, selection_id, old_menu_item_id, new_menu_item_id, changed_at, changed_by"
HOLIDAY_COLUMNS = "id, date, description, created_at"

# Columns callers may set through the generic create/update helpers
USER_MUTABLE = ("name", "email", "gender", "profile_picture", "password")
KID_MUTABLE = ("name", "grade", "school", "roll_number", "gender", "profile_picture")
MENU_MUTABLE = ("name", "description", "is_vegetarian", "price", "month", "image_url", "is_available")


def _quote(column: str) -> str:
    return f'"{column}"'


def _assignments(fields: Dict[str, Any], allowed) -> tuple:
    columns = [c for c in allowed if c in fields]
    clause = ", ".join(f"{_quote(c)} = ?" for c in columns)
    return clause, [fields[c] for c in columns]


class DuckDBLunchRepository(LunchRepository):
    """Repository backed by a DatabaseManager"""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def transaction(self):
        return self.db.transaction()

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        row = self.db.fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", [user_id])
        return User(**row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        row = self.db.fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE username = ?", [username])
        return User(**row) if row else None

    def create_user(self, fields: Dict[str, Any], created_at: dt.datetime) -> User:
        row = self.db.fetch_one(
            f"""INSERT INTO users(username, password, name, email, gender, profile_picture, is_admin, created_at)
                VALUES (?,?,?,?,?,?,?,?) RETURNING {USER_COLUMNS}""",
            [
                fields["username"], fields["password"], fields["name"], fields["email"],
                fields.get("gender"), fields.get("profile_picture"),
                bool(fields.get("is_admin", False)), created_at,
            ],
        )
        return User(**row)

    def update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[User]:
        clause, params = _assignments(fields, USER_MUTABLE)
        if clause:
            self.db.execute(f"UPDATE users SET {clause} WHERE id = ?", params + [user_id])
        return self.get_user(user_id)

    # Kids

    def list_kids(self, user_id: int) -> List[Kid]:
        rows = self.db.fetch_all(
            f"SELECT {KID_COLUMNS} FROM kids WHERE user_id = ? ORDER BY id", [user_id]
        )
        return [Kid(**row) for row in rows]

    def get_kid(self, kid_id: int) -> Optional[Kid]:
        row = self.db.fetch_one(f"SELECT {KID_COLUMNS} FROM kids WHERE id = ?", [kid_id])
        return Kid(**row) if row else None

    def create_kid(self, user_id: int, fields: Dict[str, Any]) -> Kid:
        row = self.db.fetch_one(
            f"""INSERT INTO kids(name, grade, school, roll_number, gender, profile_picture, user_id)
                VALUES (?,?,?,?,?,?,?) RETURNING {KID_COLUMNS}""",
            [
                fields["name"], fields["grade"], fields["school"], fields["roll_number"],
                fields.get("gender"), fields.get("profile_picture"), user_id,
            ],
        )
        return Kid(**row)

    def update_kid(self, kid_id: int, fields: Dict[str, Any]) -> Optional[Kid]:
        clause, params = _assignments(fields, KID_MUTABLE)
        if clause:
            self.db.execute(f"UPDATE kids SET {clause} WHERE id = ?", params + [kid_id])
        return self.get_kid(kid_id)

    def delete_kid(self, kid_id: int) -> bool:
        with self.db.transaction():
            if self.get_kid(kid_id) is None:
                return False
            self.db.execute(
                """DELETE FROM selection_history WHERE selection_id IN
                   (SELECT id FROM lunch_selections WHERE kid_id = ?)""",
                [kid_id],
            )
            self.db.execute("DELETE FROM lunch_selections WHERE kid_id = ?", [kid_id])
            self.db.execute("DELETE FROM kids WHERE id = ?", [kid_id])
            return True

    # Monthly menu

    def get_menu_item(self, menu_item_id: int) -> Optional[MonthlyMenuItem]:
        row = self.db.fetch_one(
            f"SELECT {MENU_COLUMNS} FROM monthly_menu_items WHERE id = ?", [menu_item_id]
        )
        return MonthlyMenuItem(**row) if row else None

    def list_menu_items(self, month: dt.date, available_only: bool = True) -> List[MonthlyMenuItem]:
        query = f'SELECT {MENU_COLUMNS} FROM monthly_menu_items WHERE "month" = ?'
        if available_only:
            query += " AND is_available"
        rows = self.db.fetch_all(query + " ORDER BY id", [month.replace(day=1)])
        return [MonthlyMenuItem(**row) for row in rows]

    def list_all_menu_items(self) -> List[MonthlyMenuItem]:
        rows = self.db.fetch_all(
            f'SELECT {MENU_COLUMNS} FROM monthly_menu_items ORDER BY "month" DESC, id'
        )
        return [MonthlyMenuItem(**row) for row in rows]

    def create_menu_item(self, fields: Dict[str, Any]) -> MonthlyMenuItem:
        row = self.db.fetch_one(
            f"""INSERT INTO monthly_menu_items(name, description, is_vegetarian, price, "month", image_url, is_available)
                VALUES (?,?,?,?,?,?,?) RETURNING {MENU_COLUMNS}""",
            [
                fields["name"], fields["description"], bool(fields["is_vegetarian"]),
                fields["price"], fields["month"].replace(day=1), fields["image_url"],
                bool(fields.get("is_available", True)),
            ],
        )
        return MonthlyMenuItem(**row)

    def update_menu_item(self, menu_item_id: int, fields: Dict[str, Any]) -> Optional[MonthlyMenuItem]:
        fields = dict(fields)
        if fields.get("month") is not None:
            fields["month"] = fields["month"].replace(day=1)
        clause, params = _assignments(fields, MENU_MUTABLE)
        if clause:
            self.db.execute(
                f"UPDATE monthly_menu_items SET {clause} WHERE id = ?", params + [menu_item_id]
            )
        return self.get_menu_item(menu_item_id)

    # Lunch selections

    def get_selection(self, selection_id: int) -> Optional[LunchSelection]:
        row = self.db.fetch_one(
            f"SELECT {SELECTION_COLUMNS} FROM lunch_selections WHERE id = ?", [selection_id]
        )
        return LunchSelection(**row) if row else None

    def find_selection(self, kid_id: int, date: dt.date) -> Optional[LunchSelection]:
        row = self.db.fetch_one(
            f"SELECT {SELECTION_COLUMNS} FROM lunch_selections WHERE kid_id = ? AND date = ?",
            [kid_id, date],
        )
        return LunchSelection(**row) if row else None

    def list_selections(self, kid_id: int, start: dt.date, end: dt.date) -> List[LunchSelectionDetail]:
        rows = self.db.fetch_all(
            """
            SELECT s.id, s.kid_id, s.menu_item_id, s.date, s.created_at, s.modified_at,
                   m.name AS m_name, m.description AS m_description,
                   m.is_vegetarian AS m_is_vegetarian, m.price AS m_price,
                   m."month" AS m_month, m.image_url AS m_image_url,
                   m.is_available AS m_is_available
            FROM lunch_selections s
            JOIN monthly_menu_items m ON m.id = s.menu_item_id
            WHERE s.kid_id = ? AND s.date >= ? AND s.date <= ?
            ORDER BY s.date
            """,
            [kid_id, start, end],
        )
        result = []
        for row in rows:
            menu_item = MonthlyMenuItem(
                id=row["menu_item_id"],
                name=row["m_name"],
                description=row["m_description"],
                is_vegetarian=row["m_is_vegetarian"],
                price=row["m_price"],
                month=row["m_month"],
                image_url=row["m_image_url"],
                is_available=row["m_is_available"],
            )
            result.append(LunchSelectionDetail(
                id=row["id"],
                kid_id=row["kid_id"],
                menu_item_id=row["menu_item_id"],
                date=row["date"],
                created_at=row["created_at"],
                modified_at=row["modified_at"],
                menu_item=menu_item,
            ))
        return result

    def create_selection(self, kid_id: int, menu_item_id: int, date: dt.date,
                         now: dt.datetime) -> LunchSelection:
        row = self.db.fetch_one(
            f"""INSERT INTO lunch_selections(kid_id, menu_item_id, date, created_at, modified_at)
                VALUES (?,?,?,?,?) RETURNING {SELECTION_COLUMNS}""",
            [kid_id, menu_item_id, date, now, now],
        )
        return LunchSelection(**row)

    def update_selection(self, selection_id: int, menu_item_id: int,
                         now: dt.datetime) -> Optional[LunchSelection]:
        self.db.execute(
            "UPDATE lunch_selections SET menu_item_id = ?, modified_at = ? WHERE id = ?",
            [menu_item_id, now, selection_id],
        )
        return self.get_selection(selection_id)

    def delete_selection(self, selection_id: int) -> bool:
        with self.db.transaction():
            if self.get_selection(selection_id) is None:
                return False
            self.db.execute("DELETE FROM lunch_selections WHERE id = ?", [selection_id])
            return True

    # Selection history

    def add_history(self, selection_id: int, old_menu_item_id: Optional[int],
                    new_menu_item_id: int, changed_by: int,
                    changed_at: dt.datetime) -> SelectionHistory:
        row = self.db.fetch_one(
            f"""INSERT INTO selection_history(selection_id, old_menu_item_id, new_menu_item_id, changed_at, changed_by)
                VALUES (?,?,?,?,?) RETURNING {HISTORY_COLUMNS}""",
            [selection_id, old_menu_item_id, new_menu_item_id, changed_at, changed_by],
        )
        return SelectionHistory(**row)

    def list_history(self, selection_id: int) -> List[SelectionHistory]:
        rows = self.db.fetch_all(
            f"SELECT {HISTORY_COLUMNS} FROM selection_history WHERE selection_id = ? ORDER BY id",
            [selection_id],
        )
        return [SelectionHistory(**row) for row in rows]

    # Holidays

    def list_holidays(self, start: dt.date, end: dt.date) -> List[Holiday]:
        rows = self.db.fetch_all(
            f"SELECT {HOLIDAY_COLUMNS} FROM holidays WHERE date >= ? AND date <= ? ORDER BY date",
            [start, end],
        )
        return [Holiday(**row) for row in rows]

    def get_holiday(self, holiday_id: int) -> Optional[Holiday]:
        row = self.db.fetch_one(f"SELECT {HOLIDAY_COLUMNS} FROM holidays WHERE id = ?", [holiday_id])
        return Holiday(**row) if row else None

    def get_holiday_by_date(self, date: dt.date) -> Optional[Holiday]:
        row = self.db.fetch_one(f"SELECT {HOLIDAY_COLUMNS} FROM holidays WHERE date = ?", [date])
        return Holiday(**row) if row else None

    def create_holiday(self, date: dt.date, description: str, created_at: dt.datetime) -> Holiday:
        row = self.db.fetch_one(
            f"""INSERT INTO holidays(date, description, created_at)
                VALUES (?,?,?) RETURNING {HOLIDAY_COLUMNS}""",
            [date, description, created_at],
        )
        return Holiday(**row)

    def delete_holiday(self, holiday_id: int) -> bool:
        with self.db.transaction():
            if self.get_holiday(holiday_id) is None:
                return False
            self.db.execute("DELETE FROM holidays WHERE id = ?", [holiday_id])
            return True
