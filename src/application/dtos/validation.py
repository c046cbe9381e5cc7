"""Input parsing for application commands.

Command DTOs are pydantic models. ``parse_input`` turns pydantic's
validation failure into the domain ValidationError so callers see one
error taxonomy.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.domain.errors.taxonomy import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

SHA256_HEX_PATTERN = r"^[0-9a-fA-F]{64}$"


def parse_input(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate raw input into a command DTO.

    Args:
        model: DTO class to build.
        data: Raw field values.

    Returns:
        The validated DTO.

    Raises:
        ValidationError: With the failing fields under ``details["errors"]``.
    """
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as exc:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        raise ValidationError(
            f"Invalid {model.__name__}", {"errors": errors}
        ) from exc
