from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify

from ..common.http import int_arg, iso, json_body, pairs, payload_int, payload_str, str_arg
from ..container import Container
from ..core.constants import DEFAULT_RECENT_LIMIT
from .model import NewUser, User


def user_to_payload(user: User) -> dict[str, Any]:
    return {
        "id": user.user_id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "age": user.age,
        "gender": user.gender,
        "createdAt": iso(user.created_at),
        "updatedAt": iso(user.updated_at),
    }


def user_from_payload(payload: Mapping[str, Any]) -> NewUser:
    # id/createdAt/updatedAt are assigned by the server and ignored here.
    return NewUser(
        name=payload_str(payload, "name"),
        email=payload_str(payload, "email"),
        phone=payload_str(payload, "phone"),
        age=payload_int(payload, "age"),
        gender=payload_str(payload, "gender"),
    )


def register(app: Flask, container: Container) -> None:
    users = container.user_service

    def listing(rows):
        return jsonify([user_to_payload(u) for u in rows])

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    def list_users():
        return listing(users.list_all())

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    def get_user(user_id: int):
        return jsonify(user_to_payload(users.get(user_id)))

    @app.route("/api/users/email/<email>", methods=["GET"], endpoint="users_get_by_email")
    def get_user_by_email(email: str):
        return jsonify(user_to_payload(users.get_by_email(email)))

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    def create_user():
        user = users.create(user_from_payload(json_body()))
        return jsonify(user_to_payload(user)), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    def update_user(user_id: int):
        user = users.update(user_id, user_from_payload(json_body()))
        return jsonify(user_to_payload(user))

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    def delete_user(user_id: int):
        users.delete(user_id)
        return jsonify({"message": "User deleted"})

    @app.route("/api/users/search", methods=["GET"], endpoint="users_search")
    def search_users():
        return listing(users.search(str_arg("name", required=True)))

    @app.route("/api/users/age-range", methods=["GET"], endpoint="users_age_range")
    def users_by_age_range():
        return listing(users.by_age_range(int_arg("minAge", required=True), int_arg("maxAge", required=True)))

    @app.route("/api/users/gender/<gender>", methods=["GET"], endpoint="users_by_gender")
    def users_by_gender(gender: str):
        return listing(users.by_gender(gender))

    @app.route("/api/users/filter", methods=["GET"], endpoint="users_filter")
    def filter_users():
        return listing(
            users.filter(
                name=str_arg("name"),
                gender=str_arg("gender"),
                min_age=int_arg("minAge"),
                max_age=int_arg("maxAge"),
            )
        )

    @app.route("/api/users/recent", methods=["GET"], endpoint="users_recent")
    def recent_users():
        return listing(users.recent(int_arg("limit", default=DEFAULT_RECENT_LIMIT)))

    @app.route("/api/users/statistics/age-group", methods=["GET"], endpoint="users_stats_age_group")
    def users_by_age_group():
        return jsonify(pairs(users.count_by_age_group()))

    @app.route("/api/users/statistics/gender", methods=["GET"], endpoint="users_stats_gender")
    def users_by_gender_counts():
        return jsonify(pairs(users.count_by_gender()))

    @app.route("/api/users/statistics/overall", methods=["GET"], endpoint="users_stats_overall")
    def users_overall():
        s = users.statistics()
        return jsonify(
            {
                "totalCount": s.total_count,
                "averageAge": s.average_age,
                "maleCount": s.male_count,
                "femaleCount": s.female_count,
            }
        )
