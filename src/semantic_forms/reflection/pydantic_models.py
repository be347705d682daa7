"""
Pydantic reflection.

Scalar fields act as columns, nested models as associations and
required fields as presence validations.
"""

import types
from collections import abc
from datetime import date, datetime, time
from decimal import Decimal
from typing import Annotated, Any, Callable, Iterable, Sequence, Union, get_args, get_origin

from pydantic import BaseModel, SecretBytes, SecretStr
from pydantic.fields import FieldInfo

from semantic_forms.inflections import humanize, underscore
from semantic_forms.logs import logger
from semantic_forms.models.metadata import AssociationInfo, ColumnInfo, ColumnType
from semantic_forms.reflection.base import strip_id_suffix

# Order matters: bool subclasses int, datetime subclasses date
_SCALAR_TYPES: list[tuple[type, str]] = [
    (bool, "boolean"),
    (int, "integer"),
    (float, "float"),
    (Decimal, "decimal"),
    (datetime, "datetime"),
    (date, "date"),
    (time, "time"),
    (SecretStr, "password"),
    (SecretBytes, "password"),
    (bytes, "binary"),
    (str, "string"),
]

_COLLECTION_ORIGINS = (list, tuple, set, frozenset, abc.Sequence)

COLUMN_TYPES = frozenset(get_args(ColumnType))


def _unwrap(annotation: Any) -> Any:
    """Strip Annotated and Optional wrappers."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _unwrap(get_args(annotation)[0])
    if origin in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return annotation


def _is_model(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseModel)


def _allows_none(annotation: Any) -> bool:
    return get_origin(annotation) in (Union, types.UnionType) and type(None) in get_args(annotation)


def _max_length(info: FieldInfo) -> int | None:
    for item in info.metadata:
        length = getattr(item, "max_length", None)
        if length is not None:
            return length
    return None


class PydanticReflector:
    """
    Reflection for pydantic models.

    A field may force its column type with
    ``Field(json_schema_extra={"column_type": "text"})``.

    Args:
        repository: Callable returning all records of a model class, used
            to fill association selects.
        models: Model classes that ``_id`` field names may refer to.
    """

    def __init__(
        self,
        repository: Callable[[type], Iterable[Any]] | None = None,
        models: Iterable[type] | None = None,
    ):
        self.repository = repository
        self.models = {model.__name__: model for model in (models or [])}

    def _fields(self, model: type) -> dict[str, FieldInfo]:
        if not _is_model(model):
            return {}
        return model.model_fields

    def _column_info(self, name: str, info: FieldInfo) -> ColumnInfo | None:
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        column_type = extra.get("column_type")
        if column_type is not None and column_type not in COLUMN_TYPES:
            logger.warning(f"Unknown column_type {column_type!r} on {name!r}; using the annotation")
            column_type = None
        if column_type is None:
            target = _unwrap(info.annotation)
            if get_origin(target) is not None or not isinstance(target, type):
                return None
            column_type = next((kind for py, kind in _SCALAR_TYPES if issubclass(target, py)), None)
            if column_type is None:
                return None
        return ColumnInfo(
            name=name,
            type=column_type,
            nullable=_allows_none(info.annotation),
            primary_key=name == "id",
            limit=_max_length(info),
            label=info.title,
        )

    # Schema ------------------------------------------------------------

    def column_for(self, obj: Any, name: str) -> ColumnInfo | None:
        info = self._fields(type(obj)).get(name)
        if info is None:
            return None
        return self._column_info(name, info)

    def content_columns(self, model: type) -> list[ColumnInfo]:
        columns = []
        for name, info in self._fields(model).items():
            if name == "id" or name.endswith("_id") or name.endswith("_count"):
                continue
            column = self._column_info(name, info)
            if column is not None:
                columns.append(column)
        return columns

    def human_name(self, model: type) -> str | None:
        if not _is_model(model):
            return None
        return model.model_config.get("title") or humanize(underscore(model.__name__))

    def human_attribute_name(self, model: type, name: str) -> str | None:
        info = self._fields(model).get(name)
        return info.title if info is not None else None

    def is_new_record(self, obj: Any) -> bool | None:
        if "id" not in self._fields(type(obj)):
            return None
        return getattr(obj, "id", None) is None

    # Associations ------------------------------------------------------

    def _association_info(self, name: str, info: FieldInfo) -> AssociationInfo | None:
        target = _unwrap(info.annotation)
        if _is_model(target):
            return AssociationInfo(name=name, cardinality="one", macro="belongs_to", target_class=target)
        if get_origin(target) in _COLLECTION_ORIGINS:
            args = get_args(target)
            if args and _is_model(args[0]):
                return AssociationInfo(name=name, cardinality="many", macro="has_many", target_class=args[0])
        return None

    def association_for(self, model: type, name: str) -> AssociationInfo | None:
        info = self._fields(model).get(name)
        if info is None:
            return None
        return self._association_info(name, info)

    def associations(self, model: type) -> list[AssociationInfo]:
        found = []
        for name, info in self._fields(model).items():
            association = self._association_info(name, info)
            if association is not None:
                found.append(association)
        return found

    def find_all(self, target: type) -> Sequence[Any]:
        if self.repository is None:
            logger.warning(f"No repository configured; cannot load {target.__name__} records")
            return []
        return list(self.repository(target))

    def class_for_name(self, model: type, class_name: str) -> type | None:
        if class_name in self.models:
            return self.models[class_name]
        for association in self.associations(model):
            if association.target_class.__name__ == class_name:
                return association.target_class
        return None

    # Validations -------------------------------------------------------

    def presence_validations(self, model: type) -> frozenset[str]:
        return frozenset(
            strip_id_suffix(name) for name, info in self._fields(model).items() if info.is_required()
        )
