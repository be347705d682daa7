"""
Data models for semantic-forms.

This module contains Pydantic models for:
- Field descriptors (what a template renders)
- Schema metadata (columns and associations)
- Error messages
"""

from semantic_forms.models.field_descriptor import (
    CollectionOption,
    FieldDescriptor,
)
from semantic_forms.models.form_errors import (
    FieldError,
    FormErrors,
)
from semantic_forms.models.metadata import (
    AssociationInfo,
    ColumnInfo,
)

__all__ = [
    # Descriptors
    "CollectionOption",
    "FieldDescriptor",
    # Metadata
    "AssociationInfo",
    "ColumnInfo",
    # Errors
    "FieldError",
    "FormErrors",
]
