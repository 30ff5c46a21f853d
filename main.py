"""Main entry point for the Virtual Terminal Simulator FastAPI application.

This module creates and configures the FastAPI app instance that hosts
simulated Linux terminal sessions over a REST API.

To run the development server:
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_session_registry, shutdown_session_registry
from api.exceptions import (
    SessionLimitError,
    SessionNotFoundError,
    generic_exception_handler,
    runtime_error_handler,
    session_limit_handler,
    session_not_found_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import filesystem as filesystem_routes
from api.routes import sessions as sessions_routes
from api.routes import terminal as terminal_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    print("🚀 Starting Virtual Terminal Simulator - Initializing SessionRegistry...")
    registry = initialize_session_registry()
    print(f"✅ SessionRegistry initialized (max {registry.max_sessions} sessions)")

    yield

    print("🛑 Shutting down Virtual Terminal Simulator - Dropping sessions...")
    shutdown_session_registry()
    print("✅ Shutdown complete")


app = FastAPI(
    title="Virtual Terminal Simulator",
    description="API for hosting simulated Linux terminal sessions",
    version="1.0.0",
    lifespan=lifespan,
)

# Order matters: specific exceptions before general ones
app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
app.add_exception_handler(SessionLimitError, session_limit_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(sessions_routes.router)
app.include_router(terminal_routes.router)
app.include_router(filesystem_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the Virtual Terminal Simulator API",
        "version": "1.0.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
