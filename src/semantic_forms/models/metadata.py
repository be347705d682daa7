"""
Schema metadata models.

Reflectors translate ORM or pydantic metadata into these models so the
resolver never has to know where a column or an association came from.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

ColumnType = Literal[
    "string",
    "text",
    "password",
    "integer",
    "float",
    "decimal",
    "boolean",
    "date",
    "datetime",
    "timestamp",
    "time",
    "binary",
]

AssociationMacro = Literal["belongs_to", "has_one", "has_many", "has_and_belongs_to_many"]


class ColumnInfo(BaseModel):
    """Column metadata for a persisted attribute."""

    name: str = Field(..., description="Attribute name")
    type: ColumnType = Field(..., description="Normalised column type")
    nullable: bool = Field(default=True, description="Whether NULL is allowed")
    primary_key: bool = Field(default=False, description="Whether the column is part of the primary key")
    limit: int | None = Field(default=None, description="Maximum length for string columns")
    label: str | None = Field(default=None, description="Label declared on the column")


class AssociationInfo(BaseModel):
    """Relationship metadata between two model classes."""

    name: str = Field(..., description="Association attribute name")
    cardinality: Literal["one", "many"] = Field(..., description="Single or collection reference")
    macro: AssociationMacro = Field(..., description="Kind of relationship")
    target_class: Any = Field(..., description="Class of the associated records")

    model_config = {"arbitrary_types_allowed": True}

    @property
    def is_collection(self) -> bool:
        return self.cardinality == "many"
