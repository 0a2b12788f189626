from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..common.validators import (
    require_email,
    require_max_length,
    require_non_empty,
    require_not_future,
    require_one_of,
    require_present,
    require_range,
)
from ..core.constants import (
    ADDRESS_MAX,
    DEPARTMENT_MAX,
    EMAIL_MAX,
    EMERGENCY_CONTACT_MAX,
    EMERGENCY_RELATION_MAX,
    EMPLOYEE_NAME_MAX,
    EMPLOYEE_NUMBER_MAX,
    PHONE_MAX,
    POSITION_MAX,
    SSN_MAX,
)
from ..core.enums import EmploymentStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee (HR record).

    status/resignation_date consistency is kept by resign()/rehire() only;
    a regular update may store any combination.
    """

    employee_id: int
    employee_number: str
    name: str
    ssn: str
    department: str
    position: str
    hire_date: date
    resignation_date: Optional[date]
    salary: int
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    emergency_contact: Optional[str]
    emergency_relation: Optional[str]
    status: EmploymentStatus
    created_at: datetime
    updated_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == EmploymentStatus.ACTIVE


@dataclass(frozen=True)
class NewEmployee:
    employee_number: str
    name: str
    ssn: str
    department: str
    position: str
    hire_date: date
    salary: int
    status: Union[EmploymentStatus, str]
    resignation_date: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_relation: Optional[str] = None


def validate_employee(draft: NewEmployee, today: date) -> None:
    for field_name, max_len in (
        ("employee_number", EMPLOYEE_NUMBER_MAX),
        ("name", EMPLOYEE_NAME_MAX),
        ("ssn", SSN_MAX),
        ("department", DEPARTMENT_MAX),
        ("position", POSITION_MAX),
    ):
        value = getattr(draft, field_name)
        require_non_empty(value, field_name)
        require_max_length(value, field_name, max_len)

    require_present(draft.status, "status")
    require_one_of(draft.status, "status", [s.value for s in EmploymentStatus])

    require_present(draft.hire_date, "hire_date")
    require_not_future(draft.hire_date, "hire_date", today=today)
    require_not_future(draft.resignation_date, "resignation_date", today=today)

    require_present(draft.salary, "salary")
    require_range(draft.salary, "salary", minimum=0)

    require_max_length(draft.email, "email", EMAIL_MAX)
    require_email(draft.email, "email")
    require_max_length(draft.phone, "phone", PHONE_MAX)
    require_max_length(draft.address, "address", ADDRESS_MAX)
    require_max_length(draft.emergency_contact, "emergency_contact", EMERGENCY_CONTACT_MAX)
    require_max_length(draft.emergency_relation, "emergency_relation", EMERGENCY_RELATION_MAX)


def materialize_employee(
    draft: NewEmployee,
    *,
    entity_id: int,
    created_at: Optional[datetime],
    updated_at: Optional[datetime],
) -> Employee:
    return Employee(
        employee_id=int(entity_id),
        employee_number=draft.employee_number,
        name=draft.name,
        ssn=draft.ssn,
        department=draft.department,
        position=draft.position,
        hire_date=draft.hire_date,
        resignation_date=draft.resignation_date,
        salary=draft.salary,
        # Blank email means "no email" so it stays out of the unique index.
        email=draft.email or None,
        phone=draft.phone,
        address=draft.address,
        emergency_contact=draft.emergency_contact,
        emergency_relation=draft.emergency_relation,
        status=EmploymentStatus(draft.status),
        created_at=created_at,
        updated_at=updated_at,
    )
