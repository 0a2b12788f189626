from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.records_system.records_system.core.enums import EmploymentStatus
from src.records_system.records_system.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.records_system.records_system.employees.model import NewEmployee
from src.records_system.records_system.employees.service import EmployeeService
from src.records_system.records_system.engine.memory_store import InMemoryEntityStore


def hire(number, name="Kim", *, department="Engineering", position="Engineer", salary=50_000_000,
         hired=date(2022, 3, 2), status="active", email=None, resignation_date=None) -> NewEmployee:
    return NewEmployee(
        employee_number=number,
        name=name,
        ssn="900101-1234567",
        department=department,
        position=position,
        hire_date=hired,
        salary=salary,
        status=status,
        resignation_date=resignation_date,
        email=email,
    )


@pytest.fixture
def service(clock):
    return EmployeeService(InMemoryEntityStore("employee_id", clock=clock))


@pytest.fixture
def staff(service):
    service.create(hire("E001", "Kim Minsu", department="Engineering", position="Engineer", salary=30_000_000, hired=date(2025, 2, 1)))
    service.create(hire("E002", "Lee Jiwon", department="Sales", position="Manager", salary=50_000_000, hired=date(2021, 7, 1)))
    service.create(hire("E003", "Park Kim", department="Engineering", position="Manager", salary=70_000_000, hired=date(2012, 1, 9)))
    return service


def test_salary_statistics_over_active_employees(staff):
    stats = staff.statistics()
    assert stats.total_count == 3
    assert stats.active_count == 3
    assert stats.resigned_count == 0
    assert stats.average_salary == 50_000_000
    assert stats.max_salary == 70_000_000
    assert stats.min_salary == 30_000_000


def test_non_active_employees_count_as_resigned(staff):
    e2 = staff.get_by_employee_number("E002")
    staff.update(e2.employee_id, hire("E002", "Lee Jiwon", status="on-leave", salary=50_000_000))
    staff.resign(staff.get_by_employee_number("E003").employee_id, date(2025, 6, 1))

    stats = staff.statistics()
    assert stats.active_count == 1
    assert stats.resigned_count == 2
    assert stats.average_salary == 30_000_000


def test_statistics_without_active_employees(service):
    stats = service.statistics()
    assert (stats.average_salary, stats.max_salary, stats.min_salary) == (0.0, 0, 0)


def test_status_is_stored_as_enum(service):
    employee = service.create(hire("E010"))
    assert employee.status is EmploymentStatus.ACTIVE
    assert employee.is_active


def test_unknown_status_is_rejected(service):
    with pytest.raises(ValidationError):
        service.create(hire("E010", status="retired"))


@pytest.mark.parametrize(
    "bad",
    [
        hire("", "Kim"),
        hire("E1" * 11),
        hire("E010", salary=-1),
        hire("E010", hired=date(2025, 6, 16)),
        hire("E010", resignation_date=date(2026, 1, 1)),
        hire("E010", email="nope"),
        hire("E010", email="a@b..com"),
        hire("E010", email="a@.example.com"),
        hire("E010", email="a@example.com."),
        hire("E010", email="a..b@example.com"),
        replace(hire("E010"), ssn=None),
        replace(hire("E010"), address="a" * 201),
    ],
)
def test_field_constraints(service, bad):
    with pytest.raises(ValidationError):
        service.create(bad)


def test_employee_number_is_unique(service):
    service.create(hire("E010"))
    with pytest.raises(ConflictError, match="employee number already exists"):
        service.create(hire("E010", "Other"))


def test_email_is_unique_only_when_present(service):
    service.create(hire("E010", email=""))
    second = service.create(hire("E011", email=""))
    assert second.email is None
    service.create(hire("E012", email="kim@example.com"))
    with pytest.raises(ConflictError):
        service.create(hire("E013", email="kim@example.com"))


def test_update_may_keep_own_unique_values(service):
    employee = service.create(hire("E010", email="kim@example.com"))
    updated = service.update(employee.employee_id, hire("E010", "Kim Renamed", email="kim@example.com"))
    assert updated.name == "Kim Renamed"


def test_resign_then_rehire_round_trip(service, clock):
    employee = service.create(hire("E010", status="on-leave"))

    clock.advance(days=1)
    resigned = service.resign(employee.employee_id, date(2025, 6, 10))
    assert resigned.status is EmploymentStatus.RESIGNED
    assert resigned.resignation_date == date(2025, 6, 10)
    assert resigned.updated_at > employee.updated_at

    rehired = service.rehire(employee.employee_id)
    assert rehired.status is EmploymentStatus.ACTIVE
    assert rehired.resignation_date is None
    assert rehired.created_at == employee.created_at
    assert service.get(employee.employee_id) == rehired


def test_resign_rejects_future_date(service):
    employee = service.create(hire("E010"))
    with pytest.raises(ValidationError):
        service.resign(employee.employee_id, date(2025, 7, 1))


def test_resign_and_rehire_unknown_id(service):
    with pytest.raises(NotFoundError):
        service.resign(404, date(2025, 1, 1))
    with pytest.raises(NotFoundError):
        service.rehire(404)


def test_generic_update_can_desync_status_and_resignation_date(service):
    employee = service.create(hire("E010"))
    updated = service.update(employee.employee_id, hire("E010", status="resigned"))
    assert updated.status is EmploymentStatus.RESIGNED
    assert updated.resignation_date is None


def test_pending_resignations_are_active_with_a_date(service):
    service.create(hire("E010", resignation_date=date(2025, 6, 1)))
    service.create(hire("E011"))
    service.create(hire("E012", status="resigned", resignation_date=date(2025, 5, 1)))
    assert [e.employee_number for e in service.pending_resignations()] == ["E010"]


def test_filters(staff):
    assert [e.employee_number for e in staff.by_department("Engineering")] == ["E001", "E003"]
    assert [e.employee_number for e in staff.by_position("Manager")] == ["E002", "E003"]
    assert [e.employee_number for e in staff.by_salary_range(40_000_000, 70_000_000)] == ["E002", "E003"]
    assert [e.employee_number for e in staff.by_hire_date_range(date(2020, 1, 1), None)] == ["E001", "E002"]
    assert [e.employee_number for e in staff.by_status("active")] == ["E001", "E002", "E003"]
    assert [e.employee_number for e in staff.search("kim")] == ["E001", "E003"]
    assert [e.employee_number for e in staff.filter(department="Engineering", min_salary=50_000_000)] == ["E003"]


def test_recent_by_hire_date(staff):
    assert [e.employee_number for e in staff.recent(2)] == ["E001", "E002"]


def test_group_counts_scope(staff):
    staff.resign(staff.get_by_employee_number("E003").employee_id, date(2025, 6, 1))

    assert staff.group_counts("department") == [("Engineering", 1), ("Sales", 1)]
    assert staff.group_counts("position") == [("Engineer", 1), ("Manager", 1)]
    assert staff.group_counts("status") == [("active", 2), ("resigned", 1)]
    assert staff.count_by_tenure() == [("under 1y", 1), ("3-5y", 1)]


def test_unknown_dimension_is_validation_error(staff):
    with pytest.raises(ValidationError):
        staff.group_counts("shoe_size")


def test_salary_statistics(staff):
    s = staff.salary_statistics()
    assert (s.count, s.average, s.maximum, s.minimum) == (3, 50_000_000, 70_000_000, 30_000_000)
