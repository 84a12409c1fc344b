# /app/main.py

import logging
from contextlib import asynccontextmanager

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import settings
from .core.logging_config import configure_logging
from .core.exceptions import ValidationError, NotFoundError, ConflictError, PartialPropagationFailure
from .db.database import init_db
from .models.sync_model import PropagationReport
from .routers import classes_router, assessments_router, resources_router, calendar_router

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    logger.info("%s started.", settings.PROJECT_NAME)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Class rosters, assessments and grades kept consistent across subject classes.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Domain Error Translation ---
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(PartialPropagationFailure)
async def partial_propagation_handler(request: Request, exc: PartialPropagationFailure):
    # 207: some of the writes were applied and remain in place.
    report = PropagationReport.partial(exc.completed, exc.total, str(exc))
    return JSONResponse(
        status_code=status.HTTP_207_MULTI_STATUS,
        content={**exc.to_dict(), "report": report.model_dump(mode="json")},
    )


# --- API Router Inclusion ---
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(assessments_router.router, prefix="/api/classes", tags=["Assessments"])
app.include_router(resources_router.router, prefix="/api/resources", tags=["Resources"])
app.include_router(calendar_router.router, prefix="/api/calendar", tags=["Calendar"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": f"{settings.PROJECT_NAME} is running!", "version": app.version}
