import os
import json


def _parse_cors_origins(value: str | None) -> list[str]:
    if not value:
        return ["*"]

    cleaned = value.strip()
    if not cleaned:
        return ["*"]

    if cleaned.startswith("["):
        try:
            parsed = json.loads(cleaned)
            if isinstance(parsed, list):
                origins = [str(item).strip() for item in parsed if str(item).strip()]
                if origins:
                    return origins
        except json.JSONDecodeError:
            pass

    origins = [item.strip() for item in cleaned.split(",") if item.strip()]
    return origins or ["*"]


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


STORAGE_BACKENDS = ("memory", "database")

STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "memory").strip().lower()
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./forest_manager.db")
SEED_DEMO_DATA = _parse_bool(os.environ.get("SEED_DEMO_DATA"), True)
CORS_ORIGINS = _parse_cors_origins(os.environ.get("CORS_ORIGINS"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "5000"))
