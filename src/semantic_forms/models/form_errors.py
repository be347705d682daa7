"""
Error models for rendering inline error messages.

Errors can come from the object itself (an ``errors`` mapping) or be
handed to the builder explicitly, for example straight from a pydantic
ValidationError raised while parsing the submitted form.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError


class FieldError(BaseModel):
    """Error message attached to one attribute."""

    field_name: str = Field(..., description="Name of the attribute with the error")
    message: str = Field(..., description="Human-readable error message")
    error_type: str | None = Field(default=None, description="Machine-readable error kind")


class FormErrors(BaseModel):
    """All error messages for one form object."""

    errors: list[FieldError] = Field(default_factory=list)

    def get_field_errors(self, field_name: str) -> list[FieldError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_name == field_name]

    def messages_for(self, field_name: str) -> list[str]:
        return [e.message for e in self.get_field_errors(field_name)]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FormErrors":
        """Build from ``{"title": ["can't be blank"], "body": "is too short"}``."""
        errors = []
        for field_name, messages in mapping.items():
            if isinstance(messages, str):
                messages = [messages]
            errors.extend(FieldError(field_name=str(field_name), message=str(m)) for m in messages)
        return cls(errors=errors)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "FormErrors":
        """Build from a pydantic ValidationError, keyed by the first loc entry."""
        errors = []
        for detail in exc.errors():
            loc = detail.get("loc") or ("__root__",)
            errors.append(
                FieldError(
                    field_name=str(loc[0]),
                    message=detail.get("msg", ""),
                    error_type=detail.get("type"),
                )
            )
        return cls(errors=errors)

    @classmethod
    def coerce(cls, source: Any) -> "FormErrors":
        """Accept FormErrors, a ValidationError or a mapping."""
        if isinstance(source, FormErrors):
            return source
        if isinstance(source, ValidationError):
            return cls.from_validation_error(source)
        if isinstance(source, Mapping):
            return cls.from_mapping(source)
        raise TypeError(f"Unsupported errors source: {type(source).__name__}")
