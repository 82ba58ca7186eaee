"""Explicit request payload validation.

Routers hand the raw JSON body to these helpers before calling a service, so
services only ever see validated schema objects.
"""

from collections.abc import Mapping
from typing import Any, List, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from recruitment_api.core.error_handling import (
    FieldError,
    ValidationError,
    field_errors_from_pydantic,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_payload(schema: Type[ModelT], raw: Any) -> Union[ModelT, List[FieldError]]:
    """Validate a raw payload against a schema.

    Args:
        schema: Pydantic schema class
        raw: Decoded JSON body

    Returns:
        The validated schema instance, or the list of field errors
    """
    if not isinstance(raw, Mapping):
        return [FieldError(field="body", message="Request body must be a JSON object")]

    try:
        return schema.model_validate(dict(raw))
    except PydanticValidationError as e:
        return field_errors_from_pydantic(e.errors())


def parse_payload(schema: Type[ModelT], raw: Any) -> ModelT:
    """Validate a raw payload or raise a ValidationError with its field errors."""
    result = validate_payload(schema, raw)
    if isinstance(result, list):
        raise ValidationError("Validation failed", errors=result)
    return result
