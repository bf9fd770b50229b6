"""Schema-driven validation of raw donation point submissions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import FieldError
from ..models.domain import NewDonationPoint
from ..schemas.donation_points import REQUIRED_TEXT_FIELDS, DonationPointSubmission

_MISSING_TYPES = {"missing", "string_too_short"}


@dataclass(slots=True, frozen=True)
class ValidationSuccess:
    point: NewDonationPoint


@dataclass(slots=True, frozen=True)
class ValidationFailure:
    errors: tuple[FieldError, ...]


ValidationResult = Union[ValidationSuccess, ValidationFailure]


def _to_field_error(error: dict[str, Any]) -> FieldError:
    path = tuple(error.get("loc", ()))
    field = path[0] if path else None
    code = error.get("type", "invalid")

    if field in REQUIRED_TEXT_FIELDS and (code in _MISSING_TYPES or error.get("input") is None):
        return FieldError(path=path, message=f"{field} is required", code="missing")
    if code == "missing":
        return FieldError(path=path, message=f"{field} is required", code=code)

    message = str(error.get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return FieldError(path=path, message=message, code=code)


def validate_submission(payload: Any) -> ValidationResult:
    """Check a raw payload and normalise it into a :class:`NewDonationPoint`.

    Never raises: malformed input is reported as a :class:`ValidationFailure`
    listing one entry per offending field.
    """
    if not isinstance(payload, Mapping):
        return ValidationFailure(
            errors=(FieldError(path=(), message="Submission must be a JSON object", code="type"),)
        )

    try:
        submission = DonationPointSubmission.model_validate(dict(payload))
    except PydanticValidationError as exc:
        return ValidationFailure(errors=tuple(_to_field_error(error) for error in exc.errors()))

    return ValidationSuccess(point=submission.to_new_point())
