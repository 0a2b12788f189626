from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from ..common.validators import require_not_future, require_present
from ..core.enums import EmploymentStatus
from ..engine.lifecycle import LifecycleManager
from .model import Employee, NewEmployee

logger = logging.getLogger(__name__)


class EmploymentLifecycle(LifecycleManager[Employee, NewEmployee]):
    """Employment state machine on top of the generic writes.

    resign: any state -> resigned. rehire: any state -> active. Neither checks
    the prior state; on-leave is only reachable through update().
    """

    def resign(self, employee_id: int, resignation_date: date) -> Employee:
        require_present(resignation_date, "resignation_date")
        require_not_future(resignation_date, "resignation_date", today=self.today())

        employee = self.transition(
            employee_id,
            lambda e: replace(e, status=EmploymentStatus.RESIGNED, resignation_date=resignation_date),
        )
        logger.info("employee %s resigned on %s", employee_id, resignation_date, extra={"entity": "employee", "entity_id": employee_id})
        return employee

    def rehire(self, employee_id: int) -> Employee:
        employee = self.transition(
            employee_id,
            lambda e: replace(e, status=EmploymentStatus.ACTIVE, resignation_date=None),
        )
        logger.info("employee %s rehired", employee_id, extra={"entity": "employee", "entity_id": employee_id})
        return employee
