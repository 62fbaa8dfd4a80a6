from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillbridge import __version__
from skillbridge.core.config import get_settings
from skillbridge.core.logging import configure_logging
from skillbridge.infrastructure.database import dispose_engine, init_db
from skillbridge.interfaces.http.api import create_api_router
from skillbridge.interfaces.http.errors import register_exception_handlers
from skillbridge.interfaces.http.routers import health, websocket as websocket_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    await init_db()
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Peer-to-peer skill exchange: profiles, session scheduling and a time-credit ledger",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))
    app.include_router(health.router)
    app.include_router(websocket_router.router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "skillbridge.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )
