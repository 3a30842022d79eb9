import os

from sqlmodel import Session, select

from claimdesk.core.config import get_settings
from claimdesk.core.log_config import configure_logging
from claimdesk.db.models import User
from claimdesk.db.session import Database, create_db_and_tables
from claimdesk.services.user_repository import Role, UserRepository


def setup_database(db: Database, admin_email: str, admin_password: str):
    """Create any missing tables and make sure an admin account exists."""
    create_db_and_tables(db.engine)
    print("Tables ready.")

    with Session(db.engine) as session:
        admin = session.exec(select(User).where(User.email == admin_email)).first()
        if admin:
            print(f"Admin {admin_email} already exists.")
            return admin.uid

        uid = UserRepository(session).create_user({
            "name": "Administrator",
            "email": admin_email,
            "password": admin_password,
            "role": Role.ADMIN.value,
        })
        print(f"Created admin {admin_email} ({uid}).")
        return uid


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    database = Database(settings)
    try:
        setup_database(
            database,
            os.getenv("ADMIN_EMAIL", "admin@claimdesk.com"),
            os.getenv("ADMIN_PASSWORD", "changeme"),
        )
    finally:
        database.close()
