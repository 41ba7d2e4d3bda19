"""
FastAPI app assembly: logging, middleware and router wiring.
"""
import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard import __version__
from dashboard.db.database import get_db
from dashboard.api.pages import router as pages_router
from dashboard.api.users import router as users_router
from dashboard.utils.settings import get_settings

settings = get_settings()

# Configure logging
LOG_LEVEL_NAME = settings.log_level
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="User Management Dashboard",
    description="Search, filter, paginate and manage users.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(pages_router)


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("health_check_failed")
        raise HTTPException(status_code=503, detail="database unavailable")
    return {"status": "ok", "service": "user-dashboard"}
