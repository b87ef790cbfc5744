"""Input coercion shared by the service layer."""
from typing import Any, Optional, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from bookswap.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_input(model: Type[ModelT], data: Any) -> ModelT:
    """Coerce ``data`` into ``model``, raising the catalog ``ValidationError``."""
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(str(exc)) from exc


def as_uuid(value: Union[str, UUID], field: str = "id") -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {field}: {value!r}") from exc


def check_limit(limit: Optional[int]) -> Optional[int]:
    """``None`` means unlimited; anything else must be a non-negative int."""
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValidationError(f"limit must be a non-negative integer, got {limit!r}")
    return limit
