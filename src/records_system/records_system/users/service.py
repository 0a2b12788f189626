from __future__ import annotations

from typing import Optional

from ..engine.aggregator import GroupCount
from ..engine.service import RecordService
from ..engine.store import EntityStore
from ..stats.facade import UserStatistics, summarize_users
from .kind import USER_KIND
from .model import NewUser, User


class UserService(RecordService[User, NewUser]):
    """Use case: manage users."""

    def __init__(self, users: EntityStore[User]):
        super().__init__(USER_KIND, users)

    def get_by_email(self, email: str) -> User:
        return self.get_by("email", email)

    def by_gender(self, gender: str) -> list[User]:
        return self.filter(gender=gender)

    def by_age_range(self, min_age: Optional[int], max_age: Optional[int]) -> list[User]:
        return self.filter(min_age=min_age, max_age=max_age)

    def count_by_age_group(self) -> list[GroupCount]:
        return self.group_counts("age_group")

    def count_by_gender(self) -> list[GroupCount]:
        return self.group_counts("gender")

    def statistics(self) -> UserStatistics:
        return summarize_users(self.list_all())
