from __future__ import annotations

from ..engine.aggregator import Dimension, TenureBucketPolicy
from ..engine.filters import at_least, at_most, contains, equals
from ..engine.kind import EntityKind, UniqueKey
from .model import Employee, NewEmployee, materialize_employee, validate_employee


def _is_active(employee: Employee) -> bool:
    return employee.is_active


EMPLOYEE_KIND: EntityKind[Employee, NewEmployee] = EntityKind(
    name="employee",
    id_field="employee_id",
    materialize=materialize_employee,
    validate=validate_employee,
    unique_keys=(
        UniqueKey("employee_number", "employee number"),
        UniqueKey("email", "email", skip_blank=True),
    ),
    criteria={
        "name": contains("name"),
        "department": equals("department"),
        "position": equals("position"),
        "status": equals("status"),
        "min_salary": at_least("salary"),
        "max_salary": at_most("salary"),
        "hired_from": at_least("hire_date"),
        "hired_to": at_most("hire_date"),
    },
    search_criterion="name",
    dimensions={
        "department": Dimension("department", "department", scope=_is_active),
        "position": Dimension("position", "position", scope=_is_active),
        "status": Dimension("status", "status"),
        "tenure": Dimension("tenure", "hire_date", bucket=TenureBucketPolicy(), scope=_is_active),
    },
    recent_key=lambda e: e.hire_date,
)
