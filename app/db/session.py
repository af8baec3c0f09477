import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core import config
from app.storage.base import Storage
from app.storage.database import DatabaseStorage
from app.storage.memory import MemoryStorage
from app.storage.seed import seed_demo_data

logger = logging.getLogger(__name__)


def make_engine(url: str):
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(url, pool_pre_ping=not url.startswith("sqlite"), **kwargs)


def build_storage(backend: str | None = None, database_url: str | None = None,
                  seed: bool | None = None) -> Storage:
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend not in config.STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown storage backend {backend!r}; expected one of {', '.join(config.STORAGE_BACKENDS)}"
        )

    if backend == "database":
        url = database_url or config.DATABASE_URL
        storage = DatabaseStorage.from_engine(make_engine(url))
        logger.info("Using database storage at %s", _redact_url(url))
    else:
        storage = MemoryStorage()
        logger.info("Using in-memory storage")

    if seed is None:
        seed = config.SEED_DEMO_DATA
    if seed:
        seed_demo_data(storage)
    return storage


def _redact_url(url: str) -> str:
    # hide credentials in log output
    if "@" in url:
        scheme, _, rest = url.partition("://")
        return f"{scheme}://***@{rest.split('@', 1)[1]}"
    return url


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
