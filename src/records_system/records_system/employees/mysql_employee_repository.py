from __future__ import annotations

from typing import Any, Dict, Optional

from ..common.datetime_utils import Clock
from ..core.enums import EmploymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_store import MySQLEntityStore, MySQLTable
from .model import Employee


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        employee_number=row["employee_number"],
        name=row["name"],
        ssn=row["ssn"],
        department=row["department"],
        position=row["position"],
        hire_date=row["hire_date"],
        resignation_date=row.get("resignation_date"),
        salary=int(row["salary"]),
        email=row.get("email"),
        phone=row.get("phone"),
        address=row.get("address"),
        emergency_contact=row.get("emergency_contact"),
        emergency_relation=row.get("emergency_relation"),
        status=EmploymentStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


EMPLOYEES_TABLE: MySQLTable[Employee] = MySQLTable(
    name="employees",
    id_column="employee_id",
    columns=(
        "employee_id",
        "employee_number",
        "name",
        "ssn",
        "department",
        "position",
        "hire_date",
        "resignation_date",
        "salary",
        "email",
        "phone",
        "address",
        "emergency_contact",
        "emergency_relation",
        "status",
        "created_at",
        "updated_at",
    ),
    row_factory=_row_to_employee,
)


class MySQLEmployeeRepository(MySQLEntityStore[Employee]):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Optional[Clock] = None):
        super().__init__(conn_factory, EMPLOYEES_TABLE, clock=clock)
