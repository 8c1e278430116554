from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .logging_config import setup_logging
from .routers import estimate, ai_estimate, catalog, notifications

setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)
logger = logging.getLogger("printcost")

app = FastAPI(
    title=settings.APP_NAME,
    description="3D printing cost calculator with AI-assisted estimates",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimate.router, prefix="/api")
app.include_router(ai_estimate.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")

# Serve frontend static files
frontend_path = os.path.join(os.path.dirname(__file__), "..", "frontend")
if os.path.exists(frontend_path):
    static_path = os.path.join(frontend_path, "static")
    if os.path.exists(static_path):
        app.mount("/static", StaticFiles(directory=static_path), name="static")

    @app.get("/")
    def serve_frontend():
        return FileResponse(os.path.join(frontend_path, "index.html"))


@app.get("/health")
def health():
    return {"status": "ok", "app": "printcost"}


@app.on_event("startup")
def log_startup():
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set — AI estimates and suggestions will fail")
    logger.info("%s ready (default currency %s)", settings.APP_NAME, settings.DEFAULT_CURRENCY)
