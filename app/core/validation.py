"""
Schema validation helpers.

Request shapes are pydantic models. Failures are reported as a list of
"<field>: <message>" strings inside a 400 BadRequestError, both for payloads
validated here and for FastAPI's own RequestValidationError.
"""

from typing import Any, Iterable, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.exceptions import BadRequestError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds that mean nothing to API clients
_SOURCES = {"body", "query", "path", "header", "cookie"}


def format_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """Render pydantic error dicts as readable messages."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _SOURCES:
            loc = loc[1:]
        field = ".".join(loc) or "instance"
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return messages


def validate(payload: Mapping[str, Any], schema: Type[ModelT]) -> ModelT:
    """
    Validate a payload against a pydantic model.

    Raises:
        BadRequestError: With one message per violation
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError(format_errors(e.errors()))
