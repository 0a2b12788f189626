"""Statistics facade: one fixed summary object per entity kind."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ..core.constants import GENDER_FEMALE, GENDER_MALE
from ..core.enums import EmploymentStatus
from ..engine.aggregator import average, count_where, summarize

if TYPE_CHECKING:
    from ..employees.model import Employee
    from ..sales.model import SalesRecord
    from ..users.model import User


@dataclass(frozen=True)
class UserStatistics:
    total_count: int
    average_age: float
    male_count: int
    female_count: int


@dataclass(frozen=True)
class SalesStatistics:
    total_count: int
    total_sales: int
    average_sales: float
    max_sales: int
    min_sales: int


@dataclass(frozen=True)
class EmployeeStatistics:
    total_count: int
    active_count: int
    resigned_count: int
    average_salary: float
    max_salary: int
    min_salary: int


def summarize_users(users: Iterable["User"]) -> UserStatistics:
    users = list(users)
    return UserStatistics(
        total_count=len(users),
        average_age=average(u.age for u in users),
        male_count=count_where(users, lambda u: u.gender == GENDER_MALE),
        female_count=count_where(users, lambda u: u.gender == GENDER_FEMALE),
    )


def summarize_sales(records: Iterable["SalesRecord"]) -> SalesStatistics:
    records = list(records)
    totals = summarize(r.total for r in records)
    return SalesStatistics(
        total_count=len(records),
        total_sales=totals.total,
        average_sales=totals.average,
        max_sales=totals.maximum,
        min_sales=totals.minimum,
    )


def summarize_employees(employees: Iterable["Employee"]) -> EmployeeStatistics:
    employees = list(employees)
    active = [e for e in employees if e.status == EmploymentStatus.ACTIVE]
    salaries = summarize(e.salary for e in active)
    # Every non-active employee (on-leave included) is reported as resigned.
    return EmployeeStatistics(
        total_count=len(employees),
        active_count=len(active),
        resigned_count=len(employees) - len(active),
        average_salary=salaries.average,
        max_salary=salaries.maximum,
        min_salary=salaries.minimum,
    )
