import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

from src.core.config import settings
from src.core.logging_config import setup_logging
from src.db.database import engine, get_db
from src.db.models import Base
from src.routers import prototype as prototype_router

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables:
        # Local development only; deployed databases are migrated with alembic
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured.")
    yield


app = FastAPI(title="Prototype Engine API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(prototype_router.router, prefix="/api/v1", tags=["prototype"])


@app.get("/", tags=["Health Check"])
async def read_root():
    """
    Root endpoint for basic health check.
    """
    return {"status": "ok", "message": "Prototype Engine is running."}


@app.get("/health/db", tags=["Health Check"])
def health_check_db(db: Session = Depends(get_db)):
    """
    Performs a database connection health check.
    """
    try:
        result = db.execute(text("SELECT 1")).scalar_one()
        logger.info(f"DB health check successful (SELECT 1 returned: {result})")
        return {"status": "ok", "db_check": result}
    except Exception as e:
        logger.error(f"DB health check failed: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=f"Database connection error: {e}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
