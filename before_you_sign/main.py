import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

# -------------------------------------------------------
# ⚙️ Core Imports
# -------------------------------------------------------
from .core.config import settings
from .core.db import init_db, db_healthcheck
from .core.errors import RequestIDMiddleware, register_error_handlers

# -------------------------------------------------------
# 🧩 Routers
# -------------------------------------------------------
from .routers import auth, admin, dealership, customer

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# -------------------------------------------------------
# 🚀 FastAPI Initialization
# -------------------------------------------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    description="Before You Sign – Dealership & Customer Vehicle Portal",
)

# -------------------------------------------------------
# 🗂️ Static Directory
# -------------------------------------------------------
os.makedirs(settings.STATIC_DIR, exist_ok=True)
app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

# -------------------------------------------------------
# 🧾 Request IDs & Error Pages
# -------------------------------------------------------
app.add_middleware(RequestIDMiddleware)
register_error_handlers(app)

# -------------------------------------------------------
# 🏁 Startup Events
# -------------------------------------------------------
@app.on_event("startup")
def on_startup():
    """Create tables and report where things live."""
    init_db()
    logger.info("Database models created.")
    logger.info("Environment: %s", settings.ENVIRONMENT)
    logger.info("Templates dir: %s", settings.TEMPLATES_DIR)
    logger.info("Static dir: %s", settings.STATIC_DIR)

# -------------------------------------------------------
# ❤️ Health Checks
# -------------------------------------------------------
@app.get("/health", tags=["Health"])
def health():
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "version": VERSION,
    }

@app.get("/health/db", tags=["Health"])
def health_db():
    ok, error = db_healthcheck()
    return {"database": "ok" if ok else "error", "error": error}

# -------------------------------------------------------
# 🔗 Router Registration
# -------------------------------------------------------
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(dealership.router)
app.include_router(customer.router)
