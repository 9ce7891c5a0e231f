# arqap/main.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from arq import cron
from arq.connections import create_pool, RedisSettings

from sqlalchemy.exc import OperationalError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from arqap.core.config import settings
from arqap.core.database import engine
from arqap.core.dependencies import get_db_session
from arqap.core.exceptions import ArqapError

from arqap import API_PREFIX

# task modules
from arqap.core import tasks as core_tasks
from arqap.domains.mov import tasks as mov_tasks

# domain routers
from arqap.domains.loc.routers import router as loc_router
from arqap.domains.art.routers import router as art_router
from arqap.domains.req.routers import router as req_router
from arqap.domains.mov.routers import router as mov_router
from arqap.domains.geo.routers import router as geo_router
from arqap.domains.cat.routers import router as cat_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_MODE else settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# functions the arq worker can run
worker_functions = [
    core_tasks.health_check_database_task,
    mov_tasks.audit_active_movements_task,
]


class ArqWorkerSettings:
    redis_settings = RedisSettings(host=settings.REDIS_HOST, port=settings.REDIS_PORT)
    functions = worker_functions
    cron_jobs = [
        # every day at 00:00
        cron(core_tasks.health_check_database_task, name="daily_db_health_check", hour=0, minute=0, timeout=300, keep_result=600),
        # every day at 01:00
        cron(mov_tasks.audit_active_movements_task, name="daily_movement_audit", hour=1, minute=0, timeout=1800, keep_result=3600),
    ]


# -- application lifespan --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Opens the arq Redis pool on startup; closes it and disposes the engine on shutdown.
    """
    logger.info("Starting %s %s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    app.state.redis = None
    try:
        app.state.redis = await create_pool(ArqWorkerSettings.redis_settings)
        logger.info("arq Redis pool created.")
    except Exception:
        logger.exception("Error while starting the application")
        raise

    yield

    logger.info("Shutting down %s", settings.APP_NAME)
    try:
        if app.state.redis:
            await app.state.redis.close()
            logger.info("arq Redis pool closed.")
        await engine.dispose()
        logger.info("Database pool disposed.")
    except Exception:
        logger.exception("Error while shutting down the application")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- exception handlers --
@app.exception_handler(ArqapError)
async def arqap_error_handler(request: Request, exc: ArqapError):
    if exc.status_code >= status.HTTP_409_CONFLICT:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_type": exc.error_type},
    )


@app.exception_handler(OperationalError)
async def database_unavailable_handler(request: Request, exc: OperationalError):
    logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Database unavailable", "error_type": "database_unavailable"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error during %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error_type": "internal_error"},
    )


# -- domain routers --
app.include_router(loc_router, prefix=f"{API_PREFIX}/loc", tags=["Location Management"])
app.include_router(art_router, prefix=f"{API_PREFIX}/art", tags=["Artefact Management"])
app.include_router(req_router, prefix=f"{API_PREFIX}/req", tags=["Requester Management"])
app.include_router(mov_router, prefix=f"{API_PREFIX}/mov", tags=["Movements and Loans"])
app.include_router(geo_router, prefix=f"{API_PREFIX}/geo", tags=["Geography"])
app.include_router(cat_router, prefix=f"{API_PREFIX}/cat", tags=["Catalogue"])


@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """
    Runs a trivial query to check the database connection.
    """
    try:
        result = await session.execute(select(1))
        if result.scalar_one_or_none() == 1:
            return {"status": "ok", "database_connection": "successful"}
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database health check failed: No result from test query"
        )
    except OperationalError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error during health check: {e}"
        )
