"""
SQLAlchemy reflection.

Reads column types, relationships and NOT NULL constraints from mapped
classes through ``sqlalchemy.inspect``.
"""

from typing import Any, Sequence

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.orm import Mapper, RelationshipDirection, RelationshipProperty
from sqlalchemy.sql import sqltypes as T

from semantic_forms.inflections import humanize, underscore
from semantic_forms.logs import logger
from semantic_forms.models.metadata import AssociationInfo, ColumnInfo
from semantic_forms.reflection.base import strip_id_suffix


def _column_type(column: Any) -> str:
    t = column.type
    if isinstance(t, T.Boolean):
        return "boolean"
    if isinstance(t, T.TIMESTAMP):
        return "timestamp"
    if isinstance(t, T.DateTime):
        return "datetime"
    if isinstance(t, T.Date):
        return "date"
    if isinstance(t, T.Time):
        return "time"
    if isinstance(t, T.Integer):
        return "integer"
    # Float subclasses Numeric
    if isinstance(t, T.Float):
        return "float"
    if isinstance(t, T.Numeric):
        return "decimal"
    if isinstance(t, (T.Text, T.JSON)):
        return "text"
    if isinstance(t, T.LargeBinary):
        return "binary"
    return "string"


def _macro(rel: RelationshipProperty) -> str:
    if rel.direction is RelationshipDirection.MANYTOONE:
        return "belongs_to"
    if rel.direction is RelationshipDirection.MANYTOMANY:
        return "has_and_belongs_to_many"
    return "has_many" if rel.uselist else "has_one"


class SQLAlchemyReflector:
    """
    Schema, association and validation reflection for mapped classes.

    Args:
        session: Optional Session used by ``find_all`` to load the records
            offered by association selects. Without a session those
            collections are empty.
    """

    def __init__(self, session: Any = None):
        self.session = session

    def _mapper(self, model: type) -> Mapper | None:
        mapper = sa_inspect(model, raiseerr=False)
        return mapper if isinstance(mapper, Mapper) else None

    def _column_info(self, key: str, column: Any) -> ColumnInfo:
        return ColumnInfo(
            name=key,
            type=_column_type(column),
            nullable=bool(column.nullable),
            primary_key=bool(column.primary_key),
            limit=getattr(column.type, "length", None),
            label=column.info.get("label"),
        )

    # Schema ------------------------------------------------------------

    def column_for(self, obj: Any, name: str) -> ColumnInfo | None:
        mapper = self._mapper(type(obj))
        if mapper is None or name not in mapper.column_attrs:
            return None
        return self._column_info(name, mapper.column_attrs[name].columns[0])

    def content_columns(self, model: type) -> list[ColumnInfo]:
        mapper = self._mapper(model)
        if mapper is None:
            return []
        columns = []
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            if column.primary_key or prop.key == "type":
                continue
            if prop.key.endswith("_id") or prop.key.endswith("_count"):
                continue
            columns.append(self._column_info(prop.key, column))
        return columns

    def human_name(self, model: type) -> str | None:
        mapper = self._mapper(model)
        if mapper is None:
            return None
        return mapper.local_table.info.get("label") or humanize(underscore(model.__name__))

    def human_attribute_name(self, model: type, name: str) -> str | None:
        mapper = self._mapper(model)
        if mapper is None:
            return None
        if name in mapper.column_attrs:
            return mapper.column_attrs[name].columns[0].info.get("label")
        if name in mapper.relationships:
            return mapper.relationships[name].info.get("label")
        return None

    def is_new_record(self, obj: Any) -> bool | None:
        state = sa_inspect(obj, raiseerr=False)
        if state is None or not hasattr(state, "transient"):
            return None
        return bool(state.transient or state.pending)

    # Associations ------------------------------------------------------

    def _association_info(self, rel: RelationshipProperty) -> AssociationInfo:
        return AssociationInfo(
            name=rel.key,
            cardinality="many" if rel.uselist else "one",
            macro=_macro(rel),
            target_class=rel.mapper.class_,
        )

    def association_for(self, model: type, name: str) -> AssociationInfo | None:
        mapper = self._mapper(model)
        if mapper is None or name not in mapper.relationships:
            return None
        return self._association_info(mapper.relationships[name])

    def associations(self, model: type) -> list[AssociationInfo]:
        mapper = self._mapper(model)
        if mapper is None:
            return []
        return [self._association_info(rel) for rel in mapper.relationships]

    def find_all(self, target: type) -> Sequence[Any]:
        if self.session is None:
            logger.warning(f"No session configured; cannot load {target.__name__} records")
            return []
        return list(self.session.scalars(select(target)))

    def class_for_name(self, model: type, class_name: str) -> type | None:
        mapper = self._mapper(model)
        if mapper is None:
            return None
        for candidate in mapper.registry.mappers:
            if candidate.class_.__name__ == class_name:
                return candidate.class_
        return None

    # Validations -------------------------------------------------------

    def presence_validations(self, model: type) -> frozenset[str]:
        """
        Attributes that must be present.

        ``Column.info["required"]`` wins; otherwise a column is required
        when it is NOT NULL, not part of the primary key and has no
        default. Foreign keys are reported by association name
        (``author_id`` -> ``author``).
        """
        mapper = self._mapper(model)
        if mapper is None:
            return frozenset()

        required: set[str] = set()
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            flag = column.info.get("required")
            if flag is None:
                flag = (
                    not column.nullable
                    and not column.primary_key
                    and column.default is None
                    and column.server_default is None
                )
            if flag:
                required.add(strip_id_suffix(prop.key))
        for rel in mapper.relationships:
            if rel.info.get("required"):
                required.add(rel.key)
        return frozenset(required)
