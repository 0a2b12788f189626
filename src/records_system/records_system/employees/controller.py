from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify

from ..common.http import date_arg, int_arg, iso, json_body, pairs, payload_date, payload_int, payload_str, str_arg
from ..container import Container
from ..core.constants import DEFAULT_RECENT_LIMIT
from .model import Employee, NewEmployee


def employee_to_payload(employee: Employee) -> dict[str, Any]:
    return {
        "id": employee.employee_id,
        "employeeNumber": employee.employee_number,
        "name": employee.name,
        "ssn": employee.ssn,
        "department": employee.department,
        "position": employee.position,
        "hireDate": iso(employee.hire_date),
        "resignationDate": iso(employee.resignation_date),
        "salary": employee.salary,
        "email": employee.email,
        "phone": employee.phone,
        "address": employee.address,
        "emergencyContact": employee.emergency_contact,
        "emergencyRelation": employee.emergency_relation,
        "status": employee.status.value,
        "createdAt": iso(employee.created_at),
        "updatedAt": iso(employee.updated_at),
    }


def employee_from_payload(payload: Mapping[str, Any]) -> NewEmployee:
    return NewEmployee(
        employee_number=payload_str(payload, "employeeNumber"),
        name=payload_str(payload, "name"),
        ssn=payload_str(payload, "ssn"),
        department=payload_str(payload, "department"),
        position=payload_str(payload, "position"),
        hire_date=payload_date(payload, "hireDate"),
        resignation_date=payload_date(payload, "resignationDate"),
        salary=payload_int(payload, "salary"),
        email=payload_str(payload, "email"),
        phone=payload_str(payload, "phone"),
        address=payload_str(payload, "address"),
        emergency_contact=payload_str(payload, "emergencyContact"),
        emergency_relation=payload_str(payload, "emergencyRelation"),
        status=payload_str(payload, "status"),
    )


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    def listing(rows):
        return jsonify([employee_to_payload(e) for e in rows])

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def list_employees():
        return listing(employees.list_all())

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def get_employee(employee_id: int):
        return jsonify(employee_to_payload(employees.get(employee_id)))

    @app.route(
        "/api/employees/employee-number/<employee_number>",
        methods=["GET"],
        endpoint="employees_get_by_number",
    )
    def get_employee_by_number(employee_number: str):
        return jsonify(employee_to_payload(employees.get_by_employee_number(employee_number)))

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def create_employee():
        employee = employees.create(employee_from_payload(json_body()))
        return jsonify(employee_to_payload(employee)), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    def update_employee(employee_id: int):
        employee = employees.update(employee_id, employee_from_payload(json_body()))
        return jsonify(employee_to_payload(employee))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def delete_employee(employee_id: int):
        employees.delete(employee_id)
        return jsonify({"message": "Employee deleted"})

    @app.route("/api/employees/search", methods=["GET"], endpoint="employees_search")
    def search_employees():
        return listing(employees.search(str_arg("name", required=True)))

    @app.route("/api/employees/department/<department>", methods=["GET"], endpoint="employees_by_department")
    def employees_by_department(department: str):
        return listing(employees.by_department(department))

    @app.route("/api/employees/position/<position>", methods=["GET"], endpoint="employees_by_position")
    def employees_by_position(position: str):
        return listing(employees.by_position(position))

    @app.route("/api/employees/status/<status>", methods=["GET"], endpoint="employees_by_status")
    def employees_by_status(status: str):
        return listing(employees.by_status(status))

    @app.route("/api/employees/salary-range", methods=["GET"], endpoint="employees_salary_range")
    def employees_by_salary_range():
        return listing(
            employees.by_salary_range(int_arg("minSalary", required=True), int_arg("maxSalary", required=True))
        )

    @app.route("/api/employees/hire-date-range", methods=["GET"], endpoint="employees_hire_date_range")
    def employees_by_hire_date_range():
        return listing(
            employees.by_hire_date_range(date_arg("startDate", required=True), date_arg("endDate", required=True))
        )

    @app.route("/api/employees/filter", methods=["GET"], endpoint="employees_filter")
    def filter_employees():
        return listing(
            employees.filter(
                name=str_arg("name"),
                department=str_arg("department"),
                position=str_arg("position"),
                status=str_arg("status"),
                min_salary=int_arg("minSalary"),
                max_salary=int_arg("maxSalary"),
                hired_from=date_arg("startDate"),
                hired_to=date_arg("endDate"),
            )
        )

    @app.route("/api/employees/recent", methods=["GET"], endpoint="employees_recent")
    def recent_employees():
        return listing(employees.recent(int_arg("limit", default=DEFAULT_RECENT_LIMIT)))

    @app.route("/api/employees/resignation-scheduled", methods=["GET"], endpoint="employees_pending_resignation")
    def pending_resignations():
        return listing(employees.pending_resignations())

    @app.route("/api/employees/<int:employee_id>/resign", methods=["PUT"], endpoint="employees_resign")
    def resign_employee(employee_id: int):
        employee = employees.resign(employee_id, date_arg("resignationDate", required=True))
        return jsonify(employee_to_payload(employee))

    @app.route("/api/employees/<int:employee_id>/rehire", methods=["PUT"], endpoint="employees_rehire")
    def rehire_employee(employee_id: int):
        return jsonify(employee_to_payload(employees.rehire(employee_id)))

    @app.route("/api/employees/statistics/department", methods=["GET"], endpoint="employees_stats_department")
    def employees_by_department_counts():
        return jsonify(pairs(employees.group_counts("department")))

    @app.route("/api/employees/statistics/position", methods=["GET"], endpoint="employees_stats_position")
    def employees_by_position_counts():
        return jsonify(pairs(employees.group_counts("position")))

    @app.route("/api/employees/statistics/status", methods=["GET"], endpoint="employees_stats_status")
    def employees_by_status_counts():
        return jsonify(pairs(employees.group_counts("status")))

    @app.route("/api/employees/statistics/tenure", methods=["GET"], endpoint="employees_stats_tenure")
    def employees_by_tenure():
        return jsonify(pairs(employees.count_by_tenure()))

    @app.route("/api/employees/statistics/salary", methods=["GET"], endpoint="employees_stats_salary")
    def salary_statistics():
        s = employees.salary_statistics()
        return jsonify(
            {
                "count": s.count,
                "averageSalary": s.average,
                "maxSalary": s.maximum,
                "minSalary": s.minimum,
            }
        )

    @app.route("/api/employees/statistics/overall", methods=["GET"], endpoint="employees_stats_overall")
    def employees_overall():
        s = employees.statistics()
        return jsonify(
            {
                "totalCount": s.total_count,
                "activeCount": s.active_count,
                "resignedCount": s.resigned_count,
                "averageSalary": s.average_salary,
                "maxSalary": s.max_salary,
                "minSalary": s.min_salary,
            }
        )
