"""
FastAPI application -- invoicing dashboard API server.

Run locally:
    uvicorn dashboard.app:app --reload --port 8000

On Railway, start.py handles seeding and startup.
"""

from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from dashboard.actions import redirect
from dashboard.auth import NotAuthenticated
from dashboard.config_env import LOG_LEVEL, SESSION_COOKIE, SESSION_SECRET
from dashboard.database import DatabaseError, engine, init_db
from dashboard.routes import customers, invoices, login, overview

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def _session_secret(configured: str) -> str:
    if configured:
        return configured
    logger.warning("SESSION_SECRET is not set, signing sessions with a random key (sign-ins end on restart)")
    return secrets.token_urlsafe(32)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialise database schema
    await init_db()
    logger.info("Database schema ready")

    yield

    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Invoice Dashboard API",
    version="1.0.0",
    description="Customers, invoices and revenue for the invoicing dashboard",
    lifespan=lifespan,
)

app.add_middleware(SessionMiddleware, secret_key=_session_secret(SESSION_SECRET), session_cookie=SESSION_COOKIE)

app.include_router(login.router)
app.include_router(overview.router)
app.include_router(invoices.router)
app.include_router(customers.router)


@app.middleware("http")
async def no_store_dashboard(request: Request, call_next):
    """Dashboard responses are never cached, errors included."""
    response = await call_next(request)
    if request.url.path.startswith("/dashboard"):
        response.headers["Cache-Control"] = "no-store"
    return response


@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError):
    return JSONResponse({"detail": str(exc)}, status_code=500)


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    return redirect("/login")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
