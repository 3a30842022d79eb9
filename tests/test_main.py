from fastapi.testclient import TestClient
from sqlmodel import Session

from claimdesk.db.models import Company


def test_read_main(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "ClaimDesk API is running"}


def test_health_check(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_company_model(session: Session):
    company = Company(id="comp-1", name="Acme Insurance", email="a@acme.com")
    session.add(company)
    session.commit()

    stored = session.get(Company, "comp-1")
    assert stored.name == "Acme Insurance"
    assert stored.created_at is not None


def test_request_validation_is_400(client: TestClient):
    response = client.post("/api/companies", json={})
    assert response.status_code == 400
    body = response.json()
    assert body["message"].startswith("Invalid data")
    assert body["errors"]
