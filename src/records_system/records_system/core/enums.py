from __future__ import annotations

from enum import Enum


class EmploymentStatus(str, Enum):
    """Employment state of an Employee.

    Only ACTIVE and RESIGNED are reachable through dedicated operations
    (rehire/resign); ON_LEAVE is set through a regular update.
    """

    ACTIVE = "active"
    ON_LEAVE = "on-leave"
    RESIGNED = "resigned"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    MYSQL = "mysql"
