import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from claimdesk.core.config import get_settings
from claimdesk.db import models  # noqa: F401
from claimdesk.db.models import Claim, Company, Hospital, Patient, PreAuthRequest, TPA
from claimdesk.db.session import get_session
from claimdesk.main import app
from claimdesk.services.storage_service import StorageService


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="s3_client")
def s3_client_fixture():
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://signed.example.com/upload?sig=abc"
    return client


@pytest.fixture(name="client")
def client_fixture(session: Session, s3_client):
    def get_session_override():
        return session
    app.dependency_overrides[get_session] = get_session_override
    app.state.storage = StorageService(get_settings(), client=s3_client)
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# --- Row builders ---

def add(session: Session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def make_hospital(session, id="hosp-1", name="City Hospital", **kwargs):
    return add(session, Hospital(id=id, name=name, **kwargs))


def make_company(session, id="comp-1", name="Star Health", **kwargs):
    return add(session, Company(id=id, name=name, **kwargs))


def make_tpa(session, name="MediAssist", **kwargs):
    return add(session, TPA(name=name, **kwargs))


def make_patient(session, first_name="Asha", last_name="Rao", **kwargs):
    return add(session, Patient(first_name=first_name, last_name=last_name, **kwargs))


def make_claim(session, created_at=None, **kwargs):
    stamp = created_at or datetime(2024, 3, 1, 10, 0, 0)
    kwargs.setdefault("updated_at", stamp)
    return add(session, Claim(created_at=stamp, **kwargs))


def make_preauth(session, created_at=None, **kwargs):
    stamp = created_at or datetime(2024, 3, 1, 9, 0, 0)
    return add(session, PreAuthRequest(created_at=stamp, updated_at=stamp, **kwargs))
