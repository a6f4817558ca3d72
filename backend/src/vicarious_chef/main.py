"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vicarious_chef import __version__
from vicarious_chef.config import settings
from vicarious_chef.api.routes.sessions import router as sessions_router
from vicarious_chef.repositories.challenge_catalog import ChallengeCatalog
from vicarious_chef.services.participant_registry import ParticipantRegistry
from vicarious_chef.services.session_manager import SessionManager


def load_catalog() -> ChallengeCatalog:
    """Challenge catalog from settings, or the built-in one."""
    if settings.challenge_catalog_path:
        return ChallengeCatalog.from_file(Path(settings.challenge_catalog_path))
    return ChallengeCatalog()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: Initialize registry and session manager
    if not hasattr(app.state, "settings"):
        app.state.settings = settings
    if not hasattr(app.state, "registry"):
        app.state.registry = ParticipantRegistry()
    if not hasattr(app.state, "session_manager"):
        app.state.session_manager = SessionManager(
            catalog=load_catalog(),
            tick_interval_seconds=settings.tick_interval_seconds,
            auto_countdown=settings.auto_countdown,
            team_a_name=settings.team_a_name,
            team_b_name=settings.team_b_name,
            max_team_size=settings.max_team_size,
            diagnostics_enabled=settings.match_diagnostics,
            diagnostics_dir=settings.diagnostics_dir,
        )
    yield
    # Shutdown: discard live rooms and stop their countdowns
    manager: SessionManager = app.state.session_manager
    for room_id in list(manager.sessions):
        manager.remove_session(room_id)


app = FastAPI(
    title="Vicarious Chef",
    description="Live cooking game show match engine",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "vicarious-chef"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Vicarious Chef API",
        "version": __version__,
        "docs": "/docs",
    }


# Register routers
app.include_router(sessions_router)
