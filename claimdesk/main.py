import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlmodel import Session

from claimdesk.core.config import get_settings
from claimdesk.core.errors import register_exception_handlers
from claimdesk.core.log_config import configure_logging
from claimdesk.db.session import Database, create_db_and_tables, get_session
from claimdesk.routes import (
    activity_log, admissions, attendance, claims, companies, fields, hospitals,
    patients, preauths, reports, tpas, upload, users,
)
from claimdesk.services.storage_service import StorageService

settings = get_settings()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    db = Database(settings)
    db.init()
    create_db_and_tables(db.engine)
    app.state.db = db
    app.state.storage = StorageService(settings)
    logger.info(f"{settings.PROJECT_NAME} started ({settings.APP_ENV})")
    yield
    db.close()

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(companies.router, prefix="/api/companies", tags=["Companies"])
app.include_router(hospitals.router, prefix="/api/hospitals", tags=["Hospitals"])
app.include_router(tpas.router, prefix="/api/tpas", tags=["TPAs"])
app.include_router(patients.router, prefix="/api/patients", tags=["Patients"])
app.include_router(admissions.router, prefix="/api/admissions", tags=["Admissions"])
app.include_router(preauths.router, prefix="/api/preauths", tags=["Pre-Auth"])
app.include_router(claims.router, prefix="/api/claims", tags=["Claims"])
app.include_router(users.router, prefix="/api", tags=["Users"])
app.include_router(fields.router, prefix="/api/fields", tags=["Fields"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(activity_log.router, prefix="/api/activity-log", tags=["Activity Log"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(upload.router, prefix="/api/upload", tags=["Upload"])

@app.get("/")
def root():
    return {"message": "ClaimDesk API is running"}

@app.get("/api/health")
def health(session: Session = Depends(get_session)):
    session.exec(text("SELECT 1"))
    return {"status": "ok"}
