"""Amplify: Schema Validation.

Every write goes through ``validate`` first. Unknown fields are dropped,
optional fields default to absent and enum fields are restricted to their
listed values. All violations are reported at once.
"""

from typing import Any, Dict, List, Type, TypeVar

import pydantic
from pydantic import BaseModel

from amplify.core.errors import ValidationError
from amplify.core.logging import get_logger

logger = get_logger("validation")

M = TypeVar("M", bound=BaseModel)


def _reason(error: Dict[str, Any]) -> str:
    """Map a pydantic error type onto missing / wrong type / not in enum."""
    kind = error.get("type", "")
    if kind == "missing":
        return "missing"
    if kind in ("literal_error", "enum"):
        return "not in enum"
    if kind.endswith("_type") or kind.endswith("_parsing"):
        return "wrong type"
    return error.get("msg", kind)


def _path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "(root)"


def issues_from(exc: pydantic.ValidationError) -> List[Dict[str, str]]:
    return [{"path": _path(e["loc"]), "reason": _reason(e)} for e in exc.errors()]


def validate(schema: Type[M], data: Any) -> M:
    """Return ``data`` coerced into ``schema`` or raise ValidationError."""
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        issues = issues_from(e)
        logger.warning(
            f"Validation failed for {schema.__name__}: {issues}",
            extra={"operation": f"validate.{schema.__name__}"},
        )
        raise ValidationError(schema.__name__, issues) from e
