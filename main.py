"""
Trapline FastAPI Application

Main entry point for the Trapline application, serving the REST API and
the screens trappers use to keep their operating areas, harvest logs,
trap shed, trap map and landowner permissions.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables before the settings are read
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from database import init_db
from logic.config import LOG_LEVEL
from server.areas import router as areas_router
from server.auth import router as auth_router
from server.deployments import router as deployments_router
from server.export import cleanup_browser
from server.harvests import router as harvests_router
from server.inventory import router as inventory_router
from server.landowners import router as landowners_router
from server.pages import STATIC_DIR, router as pages_router
from server.profile import router as profile_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield
    await cleanup_browser()


app = FastAPI(title="Trapline", lifespan=lifespan)

# Include all routers
app.include_router(auth_router)
app.include_router(areas_router)
app.include_router(harvests_router)
app.include_router(inventory_router)
app.include_router(deployments_router)
app.include_router(landowners_router)
app.include_router(profile_router)
app.include_router(pages_router)


# ============================================================
# Error Handling
# ============================================================


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Report database failures without changing any state.

    The request's session is rolled back when it is closed.
    """
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# ============================================================
# Static Files
# ============================================================

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
