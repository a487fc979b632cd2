"""FastAPI application factory."""
from __future__ import annotations
from contextlib import asynccontextmanager

from fastapi import FastAPI

from holdem.api.routes import router
from holdem.api.websocket import ws_router
from holdem.managers.table_manager import table_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    table_manager.ensure_pump()
    yield
    await table_manager.shutdown()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Texas Hold'em",
        description="Single-table No-Limit Hold'em against AI bots",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Routers
    app.include_router(router)
    app.include_router(ws_router)

    return app


app = create_app()
