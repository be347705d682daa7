"""
Reflection capabilities for form objects.

- SchemaReflector: column metadata
- AssociationReflector: relationships and record lookup
- ValidationReflector: presence validations
"""

from semantic_forms.reflection.base import (
    AssociationReflector,
    Reflection,
    SchemaReflector,
    ValidationReflector,
)
from semantic_forms.reflection.pydantic_models import PydanticReflector
from semantic_forms.reflection.sqla import SQLAlchemyReflector

__all__ = [
    "AssociationReflector",
    "PydanticReflector",
    "Reflection",
    "SQLAlchemyReflector",
    "SchemaReflector",
    "ValidationReflector",
]
