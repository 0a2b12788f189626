from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .common.datetime_utils import Clock, SystemClock
from .core.enums import StoreBackend
from .database.connection import DBConfig, DatabaseConnection
from .employees.model import Employee
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .engine.memory_store import InMemoryEntityStore
from .engine.store import EntityStore
from .sales.model import SalesRecord
from .sales.mysql_sales_repository import MySQLSalesRepository
from .sales.service import SalesService
from .users.model import User
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    backend: StoreBackend
    conn: Optional[DatabaseConnection]

    users_repo: EntityStore[User]
    sales_repo: EntityStore[SalesRecord]
    employees_repo: EntityStore[Employee]

    user_service: UserService
    sales_service: SalesService
    employee_service: EmployeeService


def build_container(
    *,
    backend: str | StoreBackend = StoreBackend.MEMORY,
    db_config: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
) -> Container:
    backend = StoreBackend(backend)
    clock = clock or SystemClock()

    conn: Optional[DatabaseConnection] = None
    if backend is StoreBackend.MYSQL:
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection(DBConfig.from_mapping(db_config))
        users_repo = MySQLUserRepository(conn, clock=clock)
        sales_repo = MySQLSalesRepository(conn, clock=clock)
        employees_repo = MySQLEmployeeRepository(conn, clock=clock)
    else:
        users_repo = InMemoryEntityStore("user_id", clock=clock)
        sales_repo = InMemoryEntityStore("sales_id", clock=clock)
        employees_repo = InMemoryEntityStore("employee_id", clock=clock)

    return Container(
        backend=backend,
        conn=conn,
        users_repo=users_repo,
        sales_repo=sales_repo,
        employees_repo=employees_repo,
        user_service=UserService(users_repo),
        sales_service=SalesService(sales_repo),
        employee_service=EmployeeService(employees_repo),
    )
