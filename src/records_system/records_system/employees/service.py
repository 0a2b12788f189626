from __future__ import annotations

from datetime import date
from typing import Optional, Union

from ..core.enums import EmploymentStatus
from ..engine.aggregator import GroupCount, NumericSummary, summarize
from ..engine.service import RecordService
from ..engine.store import EntityStore
from ..stats.facade import EmployeeStatistics, summarize_employees
from .kind import EMPLOYEE_KIND
from .lifecycle import EmploymentLifecycle
from .model import Employee, NewEmployee


class EmployeeService(RecordService[Employee, NewEmployee]):
    """Use case: HR records and the resign/rehire lifecycle."""

    def __init__(self, employees: EntityStore[Employee]):
        self._employment = EmploymentLifecycle(EMPLOYEE_KIND, employees)
        super().__init__(EMPLOYEE_KIND, employees, lifecycle=self._employment)

    def get_by_employee_number(self, employee_number: str) -> Employee:
        return self.get_by("employee_number", employee_number)

    def by_department(self, department: str) -> list[Employee]:
        return self.filter(department=department)

    def by_position(self, position: str) -> list[Employee]:
        return self.filter(position=position)

    def by_status(self, status: Union[EmploymentStatus, str]) -> list[Employee]:
        return self.filter(status=status)

    def by_salary_range(self, min_salary: Optional[int], max_salary: Optional[int]) -> list[Employee]:
        return self.filter(min_salary=min_salary, max_salary=max_salary)

    def by_hire_date_range(self, hired_from: Optional[date], hired_to: Optional[date]) -> list[Employee]:
        return self.filter(hired_from=hired_from, hired_to=hired_to)

    def pending_resignations(self) -> list[Employee]:
        """Active employees that still carry a resignation date."""
        return [e for e in self.list_all() if e.is_active and e.resignation_date is not None]

    def resign(self, employee_id: int, resignation_date: date) -> Employee:
        return self._employment.resign(employee_id, resignation_date)

    def rehire(self, employee_id: int) -> Employee:
        return self._employment.rehire(employee_id)

    def count_by_tenure(self) -> list[GroupCount]:
        return self.group_counts("tenure")

    def salary_statistics(self) -> NumericSummary:
        return summarize(e.salary for e in self.list_all() if e.is_active)

    def statistics(self) -> EmployeeStatistics:
        return summarize_employees(self.list_all())
