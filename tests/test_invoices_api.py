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


def create_session(client: TestClient, token: str, student_id: int, session_date: str, hours: int) -> dict:
    resp = client.post(
        "/sessions/",
        json={"student_id": student_id, "session_date": session_date, "hours": hours},
        headers=auth(token),
    )
    assert resp.status_code == 201
    return resp.json()


def test_generate_single_student_invoice():
    client = TestClient(app)
    token = register_and_login(client, "inv1@example.com", "secret")
    student_id = create_student(client, token, "An")
    for day, hours in (("2024-05-03", 1), ("2024-05-10", 2), ("2024-05-17", 1)):
        create_session(client, token, student_id, day, hours)

    resp = client.post("/invoices/generate", json={"studentId": student_id, "month": "2024-05"}, headers=auth(token))
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["items"]) == 3
    assert data["total_hours"] == 4
    assert data["total_amount"] == 800000
    assert data["month"] == "Tháng 5/2024"
    assert data["invoice_number"] == "INV-2024-05-004"
    assert data["bank_info"]["bank_code"] == "970436"
    assert "addInfo=INV202405004" in data["qr_code_url"]


def test_generate_all_students_invoice_accepts_snake_case_fields():
    client = TestClient(app)
    token = register_and_login(client, "inv2@example.com", "secret")
    b_id = create_student(client, token, "B")
    a_id = create_student(client, token, "A")
    create_session(client, token, b_id, "2024-06-03", 1)
    create_session(client, token, a_id, "2024-06-04", 2)

    resp = client.post("/invoices/generate", json={"all_students": True, "month": "2024-06"}, headers=auth(token))
    assert resp.status_code == 200
    data = resp.json()
    assert data["student_name"] == "TẤT CẢ HỌC SINH"
    assert [item["amount"] for item in data["items"]] == [400000, 200000]
    assert data["items"][0]["description"].startswith("A")


def test_generate_invoice_error_statuses():
    client = TestClient(app)
    token = register_and_login(client, "inv3@example.com", "secret")
    student_id = create_student(client, token, "Chi")

    missing_student = client.post("/invoices/generate", json={"studentId": 555, "month": "2024-05"}, headers=auth(token))
    assert missing_student.status_code == 404

    empty = client.post("/invoices/generate", json={"studentId": student_id, "month": "2024-05"}, headers=auth(token))
    assert empty.status_code == 422
    assert empty.json()["detail"] == "No sessions found for invoice"

    malformed = client.post("/invoices/generate", json={"allStudents": True, "month": "2024/05"}, headers=auth(token))
    assert malformed.status_code == 400


def test_download_pdf_for_single_student():
    client = TestClient(app)
    token = register_and_login(client, "inv4@example.com", "secret")
    student_id = create_student(client, token, "Dung")
    create_session(client, token, student_id, "2024-05-03", 2)

    resp = client.post(
        "/invoices/download-pdf", json={"studentId": student_id, "month": "2024-05"}, headers=auth(token)
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="Bao-Gia-INV-2024-05-002.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_download_monthly_pdf_uses_aggregate_filename():
    client = TestClient(app)
    token = register_and_login(client, "inv5@example.com", "secret")
    student_id = create_student(client, token, "Giang")
    create_session(client, token, student_id, "2024-06-03", 2)

    resp = client.post("/invoices/download-monthly-pdf", params={"month": "2024-06"}, headers=auth(token))
    assert resp.status_code == 200
    assert 'filename="Bao-Gia-Tong-2024-06.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_download_pdf_propagates_empty_selection_status():
    client = TestClient(app)
    token = register_and_login(client, "inv6@example.com", "secret")

    resp = client.post("/invoices/download-monthly-pdf", params={"month": "2024-06"}, headers=auth(token))
    assert resp.status_code == 422
    assert resp.json()["detail"] == "No sessions found for this month"
