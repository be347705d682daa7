"""
Reflection capabilities.

A form object may expose column metadata, association metadata and
presence validations, or any subset of them. Each capability is an
explicit interface; a ``None`` slot on :class:`Reflection` means the
capability is absent and the resolver falls back to its defaults.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Protocol, Sequence, runtime_checkable

from semantic_forms.models.metadata import AssociationInfo, ColumnInfo


@runtime_checkable
class SchemaReflector(Protocol):
    """Column metadata for persisted attributes."""

    def column_for(self, obj: Any, name: str) -> ColumnInfo | None:
        ...

    def content_columns(self, model: type) -> list[ColumnInfo]:
        ...

    def human_name(self, model: type) -> str | None:
        ...

    def human_attribute_name(self, model: type, name: str) -> str | None:
        ...

    def is_new_record(self, obj: Any) -> bool | None:
        ...


@runtime_checkable
class AssociationReflector(Protocol):
    """Relationship metadata and record lookup."""

    def association_for(self, model: type, name: str) -> AssociationInfo | None:
        ...

    def associations(self, model: type) -> list[AssociationInfo]:
        ...

    def find_all(self, target: type) -> Sequence[Any]:
        ...

    def class_for_name(self, model: type, class_name: str) -> type | None:
        ...


@runtime_checkable
class ValidationReflector(Protocol):
    """Declared presence validations."""

    def presence_validations(self, model: type) -> frozenset[str]:
        ...


def strip_id_suffix(name: str) -> str:
    return name[:-3] if name.endswith("_id") else name


@dataclass(frozen=True)
class Reflection:
    """Bundle of the reflection capabilities available for form objects."""

    schema: SchemaReflector | None = None
    associations: AssociationReflector | None = None
    validations: ValidationReflector | None = None

    @classmethod
    def none(cls) -> "Reflection":
        """Every attribute is treated as a virtual attribute."""
        return cls()

    @classmethod
    def for_sqlalchemy(cls, session: Any = None, infer_presence: bool = True) -> "Reflection":
        """
        Reflect SQLAlchemy mapped classes.

        Args:
            session: Session used to load association collections.
            infer_presence: Treat non-nullable columns without defaults as
                presence validations. When False the validation capability
                is absent and the configured default applies.
        """
        from semantic_forms.reflection.sqla import SQLAlchemyReflector

        reflector = SQLAlchemyReflector(session=session)
        return cls(
            schema=reflector,
            associations=reflector,
            validations=reflector if infer_presence else None,
        )

    @classmethod
    def for_pydantic(
        cls,
        repository: Callable[[type], Iterable[Any]] | None = None,
        models: Iterable[type] | None = None,
    ) -> "Reflection":
        """
        Reflect pydantic models.

        Args:
            repository: Callable returning all records of a model class.
            models: Model classes that ``_id`` field names may refer to.
        """
        from semantic_forms.reflection.pydantic_models import PydanticReflector

        reflector = PydanticReflector(repository=repository, models=models)
        return cls(schema=reflector, associations=reflector, validations=reflector)
