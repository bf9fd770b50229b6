"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, locations
from .config import Settings, settings
from .db.supabase import close_supabase_client, init_supabase_client
from .persistence import DonationPointStore, InMemoryDonationPointStore, SupabaseDonationPointStore


def build_store(app_settings: Settings) -> DonationPointStore | None:
    """Pick the storage backend described by the settings.

    Returns None when Supabase is selected but no client could be created;
    requests then get 503 instead of writing to a store that is not durable.
    """
    if app_settings.storage_backend == "memory":
        logging.info("Using in-memory donation point store")
        return InMemoryDonationPointStore()

    client = init_supabase_client(app_settings)
    if client is None:
        logging.error("Supabase storage selected but no client is available - donation point endpoints will answer 503")
        return None
    return SupabaseDonationPointStore(client, table=app_settings.donation_points_table)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "store", None) is None:
        app.state.store = build_store(settings)
    try:
        yield
    finally:
        close_supabase_client()


def create_app(store: DonationPointStore | None = None) -> FastAPI:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.store = store
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(locations.router, prefix=settings.api_prefix)
    return app


app = create_app()
