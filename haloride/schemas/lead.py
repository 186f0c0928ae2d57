"""Lead schemas and the field rules shared by the form and the API.

Both boundaries validate through ``LEAD_FIELD_RULES``; the only difference
between them is whether the grade must be one of ``GRADE_OPTIONS``.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    validate_email,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from haloride.core.errors import LeadValidationError
from haloride.core.time import ensure_utc

ALPHA_PATTERN = re.compile(r"[A-Za-z\s]+")
OPTIONAL_ALPHA_PATTERN = re.compile(r"[A-Za-z\s]*")
MOBILE_PATTERN = re.compile(r"[0-9]{10}")

GRADE_OPTIONS = (
    "Pre-primary",
    "Lower primary",
    "Higher primary",
    "Secondary",
    "Higher secondary",
)


@dataclass(frozen=True)
class FieldRule:
    """Constraints for one lead field.

    ``field`` is the storage/Python name, ``key`` the client-facing name used
    in error maps, and ``aliases`` any other accepted input names.
    """

    field: str
    key: str
    label: str
    required: bool = True
    min_length: int = 0
    pattern: Optional[re.Pattern] = None
    pattern_message: str = "Only alphabets allowed"
    required_message: Optional[str] = None
    is_email: bool = False
    aliases: tuple[str, ...] = ()

    @property
    def input_names(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys((self.key, self.field, *self.aliases)))

    def apply(self, value: Any, choices: Optional[Sequence[str]] = None) -> Optional[str]:
        """Return the normalized value or raise a field-level error."""
        if value is not None and not isinstance(value, str):
            raise PydanticCustomError("lead_field", "Must be text")
        if not self.required:
            # blank optional values are absent
            if value is None or not value.strip():
                return None
            value = value.strip()
        elif value is None or value == "":
            raise PydanticCustomError("lead_field", self.required_message or f"{self.label} is required")

        if self.min_length and len(value) < self.min_length:
            raise PydanticCustomError(
                "lead_field", f"{self.label} must be at least {self.min_length} characters"
            )
        if self.pattern is not None and not self.pattern.fullmatch(value):
            raise PydanticCustomError("lead_field", self.pattern_message)
        if self.is_email:
            # "Name <addr>" parses but is not a plain address
            if "<" in value or ">" in value:
                raise PydanticCustomError("lead_field", "Please enter a valid email address")
            try:
                _, value = validate_email(value)
            except PydanticCustomError:
                raise PydanticCustomError("lead_field", "Please enter a valid email address") from None
        if choices is not None and value not in choices:
            raise PydanticCustomError("lead_field", f"Please select a valid {self.label.lower()}")
        return value


LEAD_FIELD_RULES: dict[str, FieldRule] = {
    rule.field: rule
    for rule in (
        FieldRule(
            "name", "name", "Name", min_length=2, pattern=ALPHA_PATTERN,
            aliases=("parentName", "parent_name"),
        ),
        FieldRule(
            "grade", "grade", "Grade", required_message="Please select a grade",
            aliases=("childGrade", "child_grade"),
        ),
        FieldRule(
            "school_name", "schoolName", "School name", required=False,
            pattern=OPTIONAL_ALPHA_PATTERN,
        ),
        FieldRule("city", "city", "City", min_length=2, pattern=ALPHA_PATTERN),
        FieldRule(
            "mobile_number", "mobileNumber", "Mobile number", pattern=MOBILE_PATTERN,
            pattern_message="Must be exactly 10 digits",
        ),
        FieldRule("email", "email", "Email", required=False, is_email=True),
    )
}

_ERROR_KEYS = {
    name: rule.key for rule in LEAD_FIELD_RULES.values() for name in rule.input_names
}


def _input_field(field: str):
    return Field(default=None, validation_alias=AliasChoices(*LEAD_FIELD_RULES[field].input_names))


class LeadCreate(BaseModel):
    """Validated, normalized lead input. Required fields default to None so
    the shared rules, not pydantic, word the "is required" message."""

    name: str = _input_field("name")
    grade: str = _input_field("grade")
    school_name: Optional[str] = _input_field("school_name")
    city: str = _input_field("city")
    mobile_number: str = _input_field("mobile_number")
    email: Optional[str] = _input_field("email")

    model_config = ConfigDict(validate_default=True, extra="ignore")

    @field_validator("name", "grade", "school_name", "city", "mobile_number", "email", mode="before")
    @classmethod
    def apply_field_rules(cls, value, info: ValidationInfo):
        choices = None
        if info.field_name == "grade" and info.context:
            choices = info.context.get("grade_choices")
        return LEAD_FIELD_RULES[info.field_name].apply(value, choices)

    def to_storage_row(self) -> dict[str, Optional[str]]:
        """Snake_case row for stores; ``created_at`` is left to the store."""
        return self.model_dump()


class LeadRead(BaseModel):
    """Client-facing lead. Serializes to camelCase, accepts snake_case rows."""

    id: Union[int, str]
    name: str
    grade: str
    school_name: Optional[str] = None
    city: str
    mobile_number: str
    email: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    @field_validator("school_name", "email", mode="before")
    @classmethod
    def blank_as_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("created_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v[:-1] + "+00:00"
        if isinstance(v, datetime):
            return ensure_utc(v)
        return v

    def to_client(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LeadCreatedResponse(BaseModel):
    message: str
    data: LeadRead


class LeadListResponse(BaseModel):
    data: list[LeadRead]


def validate_lead_input(
    raw: Any, grade_choices: Optional[Sequence[str]] = None
) -> LeadCreate:
    """Validate raw field values, raising ``LeadValidationError`` with a
    field-to-message map on failure."""
    if not isinstance(raw, Mapping):
        raise LeadValidationError({"body": "Expected an object of lead fields"})
    context = {"grade_choices": tuple(grade_choices)} if grade_choices is not None else None
    try:
        return LeadCreate.model_validate(dict(raw), context=context)
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            loc = error["loc"][0] if error["loc"] else "body"
            errors.setdefault(_ERROR_KEYS.get(loc, str(loc)), error["msg"])
        raise LeadValidationError(errors) from exc
