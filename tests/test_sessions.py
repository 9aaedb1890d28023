import pytest
from fastapi.testclient import TestClient

from tutor_backend.app.db.base import Base
from tutor_backend.app.db.session import engine
from tutor_backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_student(client: TestClient, token: str, name: str, price: int = 200000) -> int:
    resp = client.post("/students/", json={"name": name, "price_per_hour": price}, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()["id"]


def create_session(client: TestClient, token: str, student_id: int, session_date: str, hours: int, **extra) -> dict:
    payload = {"student_id": student_id, "session_date": session_date, "hours": hours, **extra}
    resp = client.post("/sessions/", json=payload, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()


def test_create_session_derives_month_price_and_amount():
    client = TestClient(app)
    token = register_and_login(client, "sess1@example.com", "secret")
    student_id = create_student(client, token, "An", price=150000)

    data = create_session(client, token, student_id, "2024-05-14", 2)
    assert data["month"] == "2024-05"
    assert data["price_per_hour"] == 150000
    assert data["total_amount"] == 300000
    assert data["paid"] is False
    assert data["sessions"] == 1
    assert data["student_name"] == "An"


def test_create_session_with_explicit_price_overrides_student_rate():
    client = TestClient(app)
    token = register_and_login(client, "sess2@example.com", "secret")
    student_id = create_student(client, token, "Binh")

    data = create_session(client, token, student_id, "2024-05-14", 3, price_per_hour=100000, sessions=2)
    assert data["total_amount"] == 300000
    assert data["sessions"] == 2


def test_create_session_ignores_client_supplied_total():
    client = TestClient(app)
    token = register_and_login(client, "sess3@example.com", "secret")
    student_id = create_student(client, token, "Chi")

    data = create_session(client, token, student_id, "2024-05-14", 1, total_amount=1)
    assert data["total_amount"] == 200000


def test_create_session_for_unknown_student_returns_404():
    client = TestClient(app)
    token = register_and_login(client, "sess4@example.com", "secret")
    resp = client.post(
        "/sessions/", json={"student_id": 77, "session_date": "2024-05-14", "hours": 1}, headers=auth(token)
    )
    assert resp.status_code == 404


def test_create_session_with_malformed_month_returns_400():
    client = TestClient(app)
    token = register_and_login(client, "sess5@example.com", "secret")
    student_id = create_student(client, token, "Dung")
    resp = client.post(
        "/sessions/",
        json={"student_id": student_id, "session_date": "2024-05-14", "hours": 1, "month": "05/2024"},
        headers=auth(token),
    )
    assert resp.status_code == 400


def test_update_session_recomputes_total_amount():
    client = TestClient(app)
    token = register_and_login(client, "sess6@example.com", "secret")
    student_id = create_student(client, token, "Giang")
    record = create_session(client, token, student_id, "2024-05-14", 1)

    resp = client.put(f"/sessions/{record['id']}", json={"hours": 3, "session_date": "2024-06-01"}, headers=auth(token))
    assert resp.status_code == 200
    data = resp.json()
    assert data["hours"] == 3
    assert data["total_amount"] == 600000
    assert data["month"] == "2024-06"


def test_toggle_payment_flips_paid_flag():
    client = TestClient(app)
    token = register_and_login(client, "sess7@example.com", "secret")
    student_id = create_student(client, token, "Hoa")
    record = create_session(client, token, student_id, "2024-05-14", 1)

    first = client.put(f"/sessions/{record['id']}/toggle-payment", headers=auth(token))
    assert first.status_code == 200
    assert first.json()["paid"] is True
    second = client.put(f"/sessions/{record['id']}/toggle-payment", headers=auth(token))
    assert second.json()["paid"] is False


def test_list_by_month_and_distinct_months():
    client = TestClient(app)
    token = register_and_login(client, "sess8@example.com", "secret")
    student_id = create_student(client, token, "Khanh")
    create_session(client, token, student_id, "2024-05-14", 1)
    create_session(client, token, student_id, "2024-05-21", 1)
    create_session(client, token, student_id, "2024-06-04", 1)

    resp = client.get("/sessions/month/2024-05", headers=auth(token))
    assert resp.status_code == 200
    assert len(resp.json()) == 2

    months = client.get("/sessions/months", headers=auth(token))
    assert months.status_code == 200
    assert months.json() == ["2024-06", "2024-05"]

    all_records = client.get("/sessions/", headers=auth(token))
    assert len(all_records.json()) == 3


def test_list_by_malformed_month_returns_400():
    client = TestClient(app)
    token = register_and_login(client, "sess9@example.com", "secret")
    resp = client.get("/sessions/month/2024-5", headers=auth(token))
    assert resp.status_code == 400


def test_delete_session():
    client = TestClient(app)
    token = register_and_login(client, "sess10@example.com", "secret")
    student_id = create_student(client, token, "Lan")
    record = create_session(client, token, student_id, "2024-05-14", 1)

    resp = client.delete(f"/sessions/{record['id']}", headers=auth(token))
    assert resp.status_code == 200
    missing = client.put(f"/sessions/{record['id']}/toggle-payment", headers=auth(token))
    assert missing.status_code == 404
