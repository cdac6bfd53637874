# /app/main.py

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Application-specific Imports ---
from .core import config
from .core.logging_config import configure_logging
from .db.database import init_db
from .routers import (
    classes_router,
    teachers_router,
    subjects_router,
    role_templates_router,
    pages_router,
)

# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    configure_logging()
    init_db()
    yield
    # This code runs ONCE when the application shuts down.

# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="School Dashboard API",
    description="Class, teacher and subject management with gradebooks and class analytics.",
    version=config.APP_VERSION,
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
# Procedure routes under the /api prefix; all but role templates need a caller
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(teachers_router.router, prefix="/api/teachers", tags=["Teachers"])
app.include_router(subjects_router.router, prefix="/api/subjects", tags=["Subjects"])
app.include_router(role_templates_router.router, prefix="/api/role-templates", tags=["Role Templates"])

# Server-rendered dashboard pages
app.include_router(pages_router.router, prefix="/dashboard", tags=["Pages"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "School Dashboard is running!", "version": app.version}
