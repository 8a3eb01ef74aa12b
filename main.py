"""Application entry point for the Ayurvedic Diet Planner API.

Defines FastAPI app, middleware, exception handlers and includes API
routers from the `api` package. The `lifespan` handler initializes the DB
and seeds the catalog on startup.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from database import init_db
from database.deps import get_db_read
from core.exceptions import DatabaseError
from core.logger import get_logger
from core.error_handlers import register_exception_handlers
from api.patients import router as patients_router
from api.foods import router as foods_router
from api.diet_plans import router as diet_plans_router
from api.diet_charts import router as diet_charts_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    yield


app = FastAPI(title="Ayurvedic Diet Planner API", version="1.0.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If database connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.exception("Health check failed")
        raise DatabaseError(f"Database health check failed: {e}", operation="health_check")


# include routers
app.include_router(patients_router)
app.include_router(foods_router)
app.include_router(diet_plans_router)
app.include_router(diet_charts_router)


if __name__ == "__main__":
    # Allow starting the app via `python ./main.py`
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
