import logging
import re
from contextlib import contextmanager
from typing import Optional

from fastapi import HTTPException

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def leading_int(raw: Optional[str]) -> Optional[int]:
    """Integer read from the leading digits of ``raw``; trailing text is ignored."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def parse_id(raw: str, not_found: str) -> int:
    """Path ids without leading digits can't match a record, so they 404."""
    record_id = leading_int(raw)
    if record_id is None:
        raise HTTPException(status_code=404, detail=not_found)
    return record_id


def query_int(raw: Optional[str]) -> Optional[int]:
    """Filter values that are missing, unparseable or zero mean no filter."""
    return leading_int(raw) or None


def query_limit(raw: Optional[str]) -> Optional[int]:
    limit = query_int(raw)
    return limit if limit is not None and limit > 0 else None


def get_or_404(record, not_found: str):
    if record is None:
        raise HTTPException(status_code=404, detail=not_found)
    return record


@contextmanager
def internal_error(message: str):
    """Report unexpected storage failures as a 500 carrying only ``message``."""
    try:
        yield
    except HTTPException:
        raise
    except Exception:
        logger.exception(message)
        raise HTTPException(status_code=500, detail=message)
