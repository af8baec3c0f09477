"""Turn arbitrary input into validated insert/partial objects.

Both the seed loader and the HTTP exception handlers go through
``format_errors`` so every caller sees the same consolidated message.
"""
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from app.schemas.schemas import PartialModel

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


class SchemaValidationError(Exception):
    """Input failed one or more schema constraints.

    ``issues`` holds ``(field, reason)`` pairs, one per violation; ``field``
    is the dotted camelCase path, or ``""`` for object-level rules.
    """

    def __init__(self, issues: list[tuple[str, str]]):
        self.issues = issues
        self.message = format_issues(issues)
        super().__init__(self.message)


def describe_errors(errors: Iterable[dict]) -> list[tuple[str, str]]:
    issues = []
    for err in errors:
        # FastAPI prefixes request errors with where the value came from
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        reason = err.get("msg", "Invalid value")
        if reason.startswith(_VALUE_ERROR_PREFIX):
            reason = reason[len(_VALUE_ERROR_PREFIX):]
        issues.append((".".join(loc), reason))
    return issues


def format_issues(issues: list[tuple[str, str]]) -> str:
    parts = [f"{field}: {reason}" if field else reason for field, reason in issues]
    return "Validation error: " + "; ".join(parts)


def format_errors(errors: Iterable[dict]) -> str:
    return format_issues(describe_errors(errors))


def parse_insert(model: type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SchemaValidationError(describe_errors(exc.errors())) from exc


def parse_partial(model: type[ModelT], payload: Any) -> ModelT:
    if not issubclass(model, PartialModel):
        raise TypeError(f"{model.__name__} is not a partial-update schema")
    return parse_insert(model, payload)
