"""Domain exceptions and their HTTP translations."""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from property_api.logging_config import get_logger

logger = get_logger(__name__)

INVALID_DATA_MESSAGE = "The given data was invalid."

# (field, pydantic error type) -> message shown to clients
VALIDATION_MESSAGES = {
    ("latitude", "greater_than_equal"): "Latitude must be between -90 and 90 degrees.",
    ("latitude", "less_than_equal"): "Latitude must be between -90 and 90 degrees.",
    ("longitude", "greater_than_equal"): "Longitude must be between -180 and 180 degrees.",
    ("longitude", "less_than_equal"): "Longitude must be between -180 and 180 degrees.",
    ("square_feet", "greater_than_equal"): "Square feet must be at least 1.",
    ("year_built", "greater_than_equal"): "Year built cannot be before 1800.",
    ("year_built", "value_error"): "Year built cannot be in the future.",
    ("property_type", "enum"): (
        "El tipo de propiedad debe ser: casa, condominio, departamento, townhouse o duplex."
    ),
    ("status", "enum"): "El estatus debe ser: disponible, pendiente, vendida o rentada.",
}

# Request locations that are not part of the field name
_LOCATION_PREFIXES = {"body", "query", "path"}


class PropertyApiError(Exception):
    """Base exception for the property API."""
    pass


class PropertyNotFoundError(PropertyApiError):
    """Referenced property does not exist."""

    def __init__(self, property_id: int):
        self.property_id = property_id
        super().__init__(f"Property {property_id} not found")


class FieldValidationError(PropertyApiError):
    """Input failed a check that needs the database, e.g. an unknown owner."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


def field_name(loc: tuple) -> str:
    """
    Turn a pydantic error location into a dotted field name.

    Examples:
        ("body", "latitude")        → "latitude"
        ("body", "features", 0)     → "features.0"
        ("query", "per_page")       → "per_page"
    """
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def format_validation_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Group validation errors by field, using the custom wording where defined."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        name = field_name(tuple(error.get("loc", ())))
        message = VALIDATION_MESSAGES.get((name, error.get("type")), error.get("msg", "Invalid value."))
        messages = grouped.setdefault(name, [])
        if message not in messages:
            messages.append(message)
    return grouped


def validation_response(errors: dict[str, list[str]], message: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": message or INVALID_DATA_MESSAGE, "errors": errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info("validation_failed", path=request.url.path, fields=sorted(errors))
    return validation_response(errors)


async def field_validation_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
    logger.info("validation_failed", path=request.url.path, fields=[exc.field])
    return validation_response({exc.field: [exc.message]})


async def not_found_handler(request: Request, exc: PropertyNotFoundError) -> JSONResponse:
    logger.info("property_not_found", property_id=exc.property_id)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Property not found."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error translations to the application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FieldValidationError, field_validation_handler)
    app.add_exception_handler(PropertyNotFoundError, not_found_handler)
