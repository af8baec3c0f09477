import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.core import config
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.session import build_storage
from app.storage.base import Storage
from app.api import users, regions, locations, inventory, activities, tasks, metrics, dashboard

logger = logging.getLogger(__name__)


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        return response


def create_app(storage: Storage | None = None) -> FastAPI:
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(title="Forest Manager", version="0.1.0")
    app.state.storage = storage if storage is not None else build_storage()

    app.add_middleware(NoCacheMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(regions.router)
    app.include_router(locations.router)
    app.include_router(inventory.router)
    app.include_router(activities.router)
    app.include_router(tasks.router)
    app.include_router(metrics.router)
    app.include_router(dashboard.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "storage": type(app.state.storage).__name__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
