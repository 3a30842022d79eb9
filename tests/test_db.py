import pytest
from sqlmodel import create_engine, select
from sqlmodel.pool import StaticPool

from claimdesk.core.config import get_settings
from claimdesk.db.models import TPA, User
from claimdesk.db.session import Database
from claimdesk.scripts.setup_database import setup_database


@pytest.fixture(name="database")
def database_fixture():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    database = Database(get_settings(), engine=engine)
    yield database
    database.close()


def test_transaction_rolls_back_on_error(database: Database):
    setup_database(database, "admin@claimdesk.com", "pw")

    with pytest.raises(RuntimeError):
        with database.transaction() as session:
            session.add(TPA(name="Half Written"))
            session.flush()
            raise RuntimeError("boom")

    with database.session() as session:
        assert session.exec(select(TPA)).all() == []


def test_setup_database_seeds_admin_once(database: Database):
    first = setup_database(database, "admin@claimdesk.com", "pw")
    second = setup_database(database, "admin@claimdesk.com", "pw")

    assert first == second
    with database.session() as session:
        admins = session.exec(select(User).where(User.role == "Admin")).all()
        assert len(admins) == 1
        assert admins[0].password_hash != "pw"
