from __future__ import annotations

import pytest

from src.records_system.records_system.container import build_container
from src.records_system.records_system.main import create_app


@pytest.fixture
def container(clock):
    return build_container(clock=clock)


@pytest.fixture
def client(container):
    app = create_app("config.testing", container=container)
    return app.test_client()


USER = {"name": "Kim Minsu", "email": "minsu@example.com", "phone": "010-1111-2222", "age": 29, "gender": "male"}

SALE = {
    "productName": "Laptop",
    "category": "electronics",
    "price": 1500000,
    "quantity": 2,
    "total": 1,
    "salesDate": "2025-05-01",
    "salesperson": "Kim",
    "region": "Seoul",
    "status": "completed",
}

EMPLOYEE = {
    "employeeNumber": "E001",
    "name": "Lee Jiwon",
    "ssn": "900101-2345678",
    "department": "Sales",
    "position": "Manager",
    "hireDate": "2020-03-02",
    "salary": 50000000,
    "email": "jiwon@example.com",
    "status": "active",
}


def test_user_crud_round_trip(client):
    created = client.post("/api/users", json=USER)
    assert created.status_code == 201
    body = created.get_json()
    assert body["id"] == 1
    assert body["email"] == "minsu@example.com"
    assert body["createdAt"] == "2025-06-15T09:00:00"

    assert client.get("/api/users/1").get_json()["name"] == "Kim Minsu"
    assert client.get("/api/users/email/minsu@example.com").status_code == 200

    updated = client.put("/api/users/1", json={**USER, "age": 30})
    assert updated.status_code == 200
    assert updated.get_json()["age"] == 30

    deleted = client.delete("/api/users/1")
    assert deleted.status_code == 200
    assert client.get("/api/users/1").status_code == 404


def test_error_mapping(client):
    client.post("/api/users", json=USER)

    conflict = client.post("/api/users", json=USER)
    assert conflict.status_code == 409
    assert conflict.get_json()["status"] == "error"

    invalid = client.post("/api/users", json={**USER, "email": "bad", "name": "x"})
    assert invalid.status_code == 400

    assert client.post("/api/users", data="not json", content_type="text/plain").status_code == 400
    assert client.get("/api/users/99").status_code == 404
    assert client.get("/api/users/filter?minAge=abc").status_code == 400
    assert client.get("/api/users/search").status_code == 400


def test_unexpected_errors_are_500_without_details(container, clock):
    app = create_app("config.testing", container=container)

    @app.route("/api/explode", endpoint="explode")
    def explode():
        raise RuntimeError("secret detail")

    response = app.test_client().get("/api/explode")
    assert response.status_code == 500
    assert "secret" not in response.get_data(as_text=True)


def test_cors_header_present(client):
    response = client.get("/api/users")
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_user_queries_and_statistics(client):
    client.post("/api/users", json=USER)
    client.post("/api/users", json={**USER, "name": "Lee", "email": "lee@example.com", "age": 41, "gender": "female"})

    assert [u["name"] for u in client.get("/api/users/search?name=kim").get_json()] == ["Kim Minsu"]
    assert len(client.get("/api/users/age-range?minAge=20&maxAge=50").get_json()) == 2
    assert len(client.get("/api/users/gender/female").get_json()) == 1
    assert len(client.get("/api/users/filter?gender=male&minAge=20").get_json()) == 1
    assert len(client.get("/api/users/recent?limit=1").get_json()) == 1
    assert client.get("/api/users/statistics/age-group").get_json() == [["20s", 1], ["40s", 1]]
    assert client.get("/api/users/statistics/overall").get_json() == {
        "totalCount": 2,
        "averageAge": 35.0,
        "maleCount": 1,
        "femaleCount": 1,
    }


def test_sales_total_is_derived_and_client_total_ignored(client):
    body = client.post("/api/sales", json=SALE).get_json()
    assert body["total"] == 3000000

    client.post("/api/sales", json={**SALE, "productName": "Desk", "category": "furniture", "price": 200000, "quantity": 1,
                                    "salesDate": "2025-04-11"})

    assert client.get("/api/sales/statistics/category").get_json() == [["electronics", 3000000], ["furniture", 200000]]
    assert client.get("/api/sales/statistics/monthly").get_json() == [[2025, 5, 3000000], [2025, 4, 200000]]
    assert client.get("/api/sales/filter?category=electronics&minPrice=10000000").get_json() == []
    assert len(client.get("/api/sales/date-range?startDate=2025-04-01&endDate=2025-04-30").get_json()) == 1
    assert client.get("/api/sales/date-range?startDate=yesterday&endDate=2025-04-30").status_code == 400
    assert client.get("/api/sales/top?limit=1").get_json()[0]["productName"] == "Laptop"
    assert client.get("/api/sales/statistics/count/region").get_json() == [["Seoul", 2]]
    assert client.get("/api/sales/statistics/overall").get_json()["totalSales"] == 3200000


def test_sales_future_date_rejected(client):
    assert client.post("/api/sales", json={**SALE, "salesDate": "2025-06-16"}).status_code == 400


def test_employee_resign_and_rehire(client):
    created = client.post("/api/employees", json=EMPLOYEE).get_json()
    employee_id = created["id"]
    assert created["status"] == "active"

    resigned = client.put(f"/api/employees/{employee_id}/resign?resignationDate=2025-06-01")
    assert resigned.status_code == 200
    assert resigned.get_json()["status"] == "resigned"
    assert resigned.get_json()["resignationDate"] == "2025-06-01"

    rehired = client.put(f"/api/employees/{employee_id}/rehire").get_json()
    assert rehired["status"] == "active"
    assert rehired["resignationDate"] is None

    assert client.put("/api/employees/999/rehire").status_code == 404
    assert client.put(f"/api/employees/{employee_id}/resign").status_code == 400


def test_employee_queries_and_statistics(client):
    client.post("/api/employees", json=EMPLOYEE)
    client.post("/api/employees", json={**EMPLOYEE, "employeeNumber": "E002", "email": "", "salary": 70000000,
                                        "department": "Engineering", "resignationDate": "2025-05-31"})

    assert client.get("/api/employees/employee-number/E002").get_json()["email"] is None
    assert client.post("/api/employees", json={**EMPLOYEE, "email": "other@example.com"}).status_code == 409
    assert [e["employeeNumber"] for e in client.get("/api/employees/resignation-scheduled").get_json()] == ["E002"]
    assert len(client.get("/api/employees/salary-range?minSalary=60000000&maxSalary=80000000").get_json()) == 1
    assert len(client.get("/api/employees/hire-date-range?startDate=2020-01-01&endDate=2020-12-31").get_json()) == 2
    assert client.get("/api/employees/statistics/status").get_json() == [["active", 2]]
    assert client.get("/api/employees/statistics/tenure").get_json() == [["5-10y", 2]]
    assert client.get("/api/employees/statistics/salary").get_json() == {
        "count": 2,
        "averageSalary": 60000000.0,
        "maxSalary": 70000000,
        "minSalary": 50000000,
    }
    assert client.get("/api/employees/statistics/overall").get_json()["resignedCount"] == 0
