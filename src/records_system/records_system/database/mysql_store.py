"""Table-mapped EntityStore over mysql-connector.

One MySQLEntityStore serves any entity kind; the per-feature modules only
describe their table (columns and a row factory).
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Sequence, TypeVar

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import Clock, SystemClock
from ..core.exceptions import ConflictError
from ..engine.filters import Op, Predicate
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone, to_db_value

T = TypeVar("T")

logger = logging.getLogger(__name__)

_SQL_OPS: Dict[Op, str] = {
    Op.CONTAINS: "LOCATE(LOWER(%s), LOWER({col})) > 0",
    Op.EQUALS: "{col} = %s",
    Op.AT_LEAST: "{col} >= %s",
    Op.AT_MOST: "{col} <= %s",
}


@dataclass(frozen=True)
class MySQLTable(Generic[T]):
    name: str
    id_column: str
    # Column names match the entity attribute names.
    columns: tuple[str, ...]
    row_factory: Callable[[Dict[str, Any]], T]
    sequence: Optional[str] = None

    @property
    def sequence_name(self) -> str:
        return self.sequence or self.name

    @property
    def select_list(self) -> str:
        return ", ".join(self.columns)

    def column(self, field: str) -> str:
        if field not in self.columns:
            raise ValueError(f"Unknown column {field!r} for table {self.name}")
        return field


def compile_where(table: MySQLTable[Any], predicates: Sequence[Predicate]) -> tuple[str, list[Any]]:
    """Turn predicates into one parameterized WHERE clause (AND-joined)."""
    clauses: list[str] = []
    params: list[Any] = []
    for predicate in predicates:
        col = table.column(predicate.field)
        clauses.append(_SQL_OPS[predicate.op].format(col=col))
        params.append(to_db_value(predicate.value))
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


class MySQLEntityStore(Generic[T]):
    """EntityStore backed by one MySQL table.

    transaction() pins a connection to the current thread; every statement
    issued inside it runs on that connection and row lookups take
    ``FOR UPDATE`` locks. Outside a transaction each call uses a short-lived
    connection through db_cursor().
    """

    def __init__(self, conn_factory: DatabaseConnection, table: MySQLTable[T], *, clock: Optional[Clock] = None):
        self._conn_factory = conn_factory
        self._table = table
        self._clock = clock or SystemClock()
        self._local = threading.local()

    def _current_conn(self):
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._current_conn() is not None:
            yield
            return

        conn = self._conn_factory.connect()
        conn.start_transaction()
        self._local.conn = conn
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()

    @contextmanager
    def _cursor(self):
        conn = self._current_conn()
        if conn is None:
            with db_cursor(self._conn_factory) as (_, cur):
                yield cur
            return

        cur = conn.cursor(dictionary=True)
        try:
            yield cur
        finally:
            cur.close()

    def _locking(self) -> str:
        return " FOR UPDATE" if self._current_conn() is not None else ""

    def next_id(self) -> int:
        with self._cursor() as cur:
            cur.execute(
                "UPDATE id_sequences SET current_value = LAST_INSERT_ID(current_value + 1) WHERE name = %s",
                (self._table.sequence_name,),
            )
            if cur.rowcount == 0:
                raise RuntimeError(f"Missing id_sequences row for {self._table.sequence_name}")
            cur.execute("SELECT LAST_INSERT_ID() AS id")
            row = fetchone(cur)
            return int(row["id"])

    def now(self) -> datetime:
        return self._clock.now()

    def list_all(self) -> Sequence[T]:
        t = self._table
        with self._cursor() as cur:
            cur.execute(f"SELECT {t.select_list} FROM {t.name} ORDER BY {t.id_column}")
            return [t.row_factory(r) for r in fetchall(cur)]

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self._lookup(self._table.id_column, int(entity_id))

    def find_one(self, field: str, value: Any) -> Optional[T]:
        return self._lookup(self._table.column(field), value)

    def _lookup(self, col: str, value: Any) -> Optional[T]:
        t = self._table
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {t.select_list} FROM {t.name} WHERE {col} = %s LIMIT 1{self._locking()}",
                (to_db_value(value),),
            )
            row = fetchone(cur)
            return t.row_factory(row) if row else None

    def select(self, predicates: Sequence[Predicate]) -> Sequence[T]:
        t = self._table
        where, params = compile_where(t, predicates)
        with self._cursor() as cur:
            cur.execute(f"SELECT {t.select_list} FROM {t.name}{where} ORDER BY {t.id_column}", tuple(params))
            return [t.row_factory(r) for r in fetchall(cur)]

    def insert(self, entity: T) -> None:
        t = self._table
        placeholders = ", ".join(["%s"] * len(t.columns))
        values = tuple(to_db_value(getattr(entity, c)) for c in t.columns)
        with self._duplicate_key_as_conflict(), self._cursor() as cur:
            cur.execute(f"INSERT INTO {t.name} ({t.select_list}) VALUES ({placeholders})", values)

    def replace(self, entity: T) -> None:
        t = self._table
        cols = [c for c in t.columns if c != t.id_column]
        assignments = ", ".join(f"{c} = %s" for c in cols)
        values = tuple(to_db_value(getattr(entity, c)) for c in cols)
        entity_id = int(getattr(entity, t.id_column))
        # rowcount is 0 for an unchanged row, so it says nothing about existence.
        with self._duplicate_key_as_conflict(), self._cursor() as cur:
            cur.execute(f"UPDATE {t.name} SET {assignments} WHERE {t.id_column} = %s", values + (entity_id,))

    def delete_by_id(self, entity_id: int) -> bool:
        t = self._table
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM {t.name} WHERE {t.id_column} = %s", (int(entity_id),))
            return cur.rowcount > 0

    @contextmanager
    def _duplicate_key_as_conflict(self):
        try:
            yield
        except mysql.connector.IntegrityError as exc:
            if exc.errno != errorcode.ER_DUP_ENTRY:
                raise
            logger.warning("duplicate key on %s: %s", self._table.name, exc.msg)
            raise ConflictError(f"Duplicate value rejected by {self._table.name}: {exc.msg}") from exc
