from __future__ import annotations

from ..engine.aggregator import AgeBucketPolicy, Dimension
from ..engine.filters import at_least, at_most, contains, equals
from ..engine.kind import EntityKind, UniqueKey
from .model import NewUser, User, materialize_user, validate_user

USER_KIND: EntityKind[User, NewUser] = EntityKind(
    name="user",
    id_field="user_id",
    materialize=materialize_user,
    validate=validate_user,
    unique_keys=(UniqueKey("email", "email"),),
    criteria={
        "name": contains("name"),
        "gender": equals("gender"),
        "min_age": at_least("age"),
        "max_age": at_most("age"),
    },
    search_criterion="name",
    dimensions={
        "gender": Dimension("gender", "gender"),
        "age_group": Dimension("age_group", "age", bucket=AgeBucketPolicy()),
    },
    recent_key=lambda u: u.created_at,
)
