from fastapi.testclient import TestClient
from tutor_backend.app.main import app

client = TestClient(app)


def test_read_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"app": "Tutor Fee Manager", "status": "ok"}


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_business_routes_require_token():
    for path in ("/students/", "/sessions/", "/dashboard/monthly-stats"):
        response = client.get(path)
        assert response.status_code == 401
