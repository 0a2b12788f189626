from __future__ import annotations

from typing import Any, Dict, Optional

from ..common.datetime_utils import Clock
from ..database.connection import DatabaseConnection
from ..database.mysql_store import MySQLEntityStore, MySQLTable
from .model import User


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        age=int(row["age"]) if row.get("age") is not None else None,
        gender=row.get("gender"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


USERS_TABLE: MySQLTable[User] = MySQLTable(
    name="users",
    id_column="user_id",
    columns=("user_id", "name", "email", "phone", "age", "gender", "created_at", "updated_at"),
    row_factory=_row_to_user,
)


class MySQLUserRepository(MySQLEntityStore[User]):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Optional[Clock] = None):
        super().__init__(conn_factory, USERS_TABLE, clock=clock)
