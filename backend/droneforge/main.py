import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from droneforge.api.v1.routes_builds import router as builds_router
from droneforge.api.v1.routes_catalog import router as catalog_router
from droneforge.api.v1.routes_evaluation import router as evaluation_router
from droneforge.api.v1.routes_runs import router as runs_router
from droneforge.core.config import get_settings
from droneforge.db.queries import create_builds_table, create_test_runs_table

logger = logging.getLogger("droneforge.backend")

app = FastAPI(title="DroneForge Backend", version="0.1.0")
settings = get_settings()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id", str(uuid.uuid4()))
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def on_startup():
    try:
        create_test_runs_table()
        create_builds_table()
        logger.info("test_runs and builds tables ensured")
    except Exception as exc:  # pragma: no cover - surfaced during startup
        logger.exception("failed to initialize database: %s", exc)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "internal server error"})


app.include_router(catalog_router, prefix="/api/v1")
app.include_router(evaluation_router, prefix="/api/v1")
app.include_router(builds_router, prefix="/api/v1")
app.include_router(runs_router, prefix="/api/v1")
