"""
Input-Type Resolver.

Given a form object and an attribute name, decides which widget to use
and assembles the FieldDescriptor a template renders. Every decision has
a fallback, so missing metadata never raises; the only failure is the
deprecated ``_id`` inference when the class cannot be found.
"""

import warnings
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping

from semantic_forms.config import SemanticFormConfig, get_config
from semantic_forms.errors import ModelLookupError
from semantic_forms.inflections import camelize, label_strategy, pluralize, singularize
from semantic_forms.logs import logger
from semantic_forms.models.field_descriptor import CollectionOption, FieldDescriptor
from semantic_forms.models.metadata import AssociationInfo
from semantic_forms.reflection.base import Reflection, strip_id_suffix

# Widgets that render a collection of options
COLLECTION_INPUT_TYPES = frozenset({"select", "radio"})

NUMERIC_COLUMN_TYPES = frozenset({"integer", "float", "decimal"})

# Collection entries of these types are rendered as they are
PRIMITIVE_TYPES = (str, int, float, Decimal, Enum, tuple, list)

# Options copied straight onto the descriptor
DESCRIPTOR_OPTIONS = (
    "hint",
    "input_html",
    "label_html",
    "wrapper_html",
    "checked_value",
    "unchecked_value",
    "include_blank",
    "priority_zones",
    "input_options",
)


def _send(record: Any, accessor: str | Callable[[Any], Any]) -> Any:
    if callable(accessor):
        return accessor(record)
    attribute = getattr(record, accessor)
    return attribute() if callable(attribute) else attribute


class InputTypeResolver:
    """
    Infers widget kinds, required flags and option collections.

    Args:
        config: Configuration; defaults to the process-wide one.
        reflection: Reflection capabilities; defaults to none, which treats
            every attribute as virtual.
    """

    def __init__(
        self,
        config: SemanticFormConfig | None = None,
        reflection: Reflection | None = None,
    ):
        self.config = config or get_config()
        self.reflection = reflection or Reflection.none()
        self.label_str = label_strategy(self.config.label_str_method)

    def resolve(self, obj: Any, method: str, options: Mapping[str, Any] | None = None) -> FieldDescriptor:
        """
        Build the descriptor for ``method`` on ``obj``.

        Options understood: ``as``, ``label``, ``required``, ``hint``,
        ``collection``, ``label_method``, ``value_method``, ``true``,
        ``false``, ``multiple``, ``value``, the ``*_html`` attribute
        overrides and the widget options of FieldDescriptor. Anything else
        ends up in ``extras``. Neither ``obj`` nor ``options`` is modified.
        """
        options = dict(options or {})
        reflection = self.find_reflection(obj, method)
        value_method = options.get("value_method") or "id"

        input_type = options.pop("as", None) or self.default_input_type(obj, method)
        required = self.method_required(obj, method, options)

        collection = None
        if input_type in COLLECTION_INPUT_TYPES:
            collection = self.find_collection_for_column(obj, method, options)

        input_name = self.generate_association_input_name(obj, method)
        label = options.pop("label", None) or self.humanized_attribute_name(obj, method)
        multiple = options.pop("multiple", reflection is not None and reflection.is_collection)
        if "value" in options:
            value = options.pop("value")
        else:
            value = self.attribute_value(obj, method, input_name, reflection, value_method)
        known = {key: options.pop(key) for key in DESCRIPTOR_OPTIONS if key in options}

        return FieldDescriptor(
            name=method,
            input_type=str(input_type),
            required=required,
            label=str(label),
            input_name=input_name,
            value=value,
            collection=collection,
            reflection=reflection,
            multiple=bool(multiple),
            extras=options,
            **known,
        )

    def default_input_type(self, obj: Any, method: str) -> str:
        """
        Best guess at the widget for ``method``.

        Columns mostly map to their own type, with a few special cases
        (integer, float and decimal all become ``numeric``). Attributes
        without a column default to ``string``.
        """
        if obj is None:
            return "string"

        column = None
        if self.reflection.schema is not None:
            column = self.reflection.schema.column_for(obj, method)

        if column is not None:
            if column.type == "string" and "time_zone" in method:
                return "time_zone"
            if column.type == "integer" and method.endswith("_id"):
                return "select"
            if column.type == "timestamp":
                return "datetime"
            if column.type in NUMERIC_COLUMN_TYPES:
                return "numeric"
            if column.type == "string" and "password" in method:
                return "password"
            return column.type

        if self.find_reflection(obj, method) is not None:
            return "select"
        value = getattr(obj, method, None)
        if value is not None and any(hasattr(value, probe) for probe in self.config.file_methods):
            return "file"
        if "password" in method:
            return "password"
        return "string"

    def method_required(self, obj: Any, method: str, options: dict[str, Any]) -> bool:
        """
        Whether ``method`` should be marked as required.

        An explicit ``required`` option wins. Otherwise, when presence
        validations are available, the attribute (without a trailing
        ``_id``) must be among them. Otherwise the configured default
        applies.
        """
        if "required" in options:
            return bool(options.pop("required"))

        validations = self.reflection.validations
        if obj is not None and validations is not None:
            return strip_id_suffix(method) in validations.presence_validations(type(obj))
        return self.config.all_fields_required_by_default

    def find_collection_for_column(self, obj: Any, column: str, options: dict[str, Any]) -> list[Any]:
        """
        Options for select and radio inputs.

        The collection is, in order of preference, the explicit
        ``collection`` option, every record of the associated class, or a
        localised yes/no pair. Mappings become (key, value) pairs. Lists of
        primitives or pairs are returned as they are; records are turned
        into (label, value) pairs with ``label_method`` and
        ``value_method``.
        """
        reflection = self.find_reflection(obj, column)

        collection = options.pop("collection", None)
        if collection is None:
            if reflection is not None or column.endswith("_id"):
                if reflection is not None:
                    target = reflection.target_class
                else:
                    target = self._class_from_id_column(obj, column)
                collection = self.reflection.associations.find_all(target)
            else:
                collection = self.create_boolean_collection(options)

        if isinstance(collection, str):
            collection = [collection]
        elif isinstance(collection, Mapping):
            collection = list(collection.items())
        elif not isinstance(collection, list):
            collection = list(collection)

        if not collection or isinstance(collection[0], PRIMITIVE_TYPES):
            return collection

        label = options.pop("label_method", None) or self.detect_label_method(collection)
        value = options.pop("value_method", None) or "id"
        return [CollectionOption(_send(record, label), _send(record, value)) for record in collection]

    def _class_from_id_column(self, obj: Any, column: str) -> type:
        stem = strip_id_suffix(column)
        warnings.warn(
            f"Inferring the association from {column!r} is deprecated; "
            f"use the association name ({stem!r}) instead",
            DeprecationWarning,
            stacklevel=5,
        )
        class_name = camelize(stem)
        logger.debug(f"Resolving {class_name} from {column!r}")

        associations = self.reflection.associations
        target = None
        if associations is not None:
            target = associations.class_for_name(type(obj), class_name)
        if target is None:
            raise ModelLookupError(f"Cannot resolve model class {class_name!r} from {column!r}")
        return target

    def detect_label_method(self, collection: list[Any]) -> str | None:
        """First configured label accessor present on the first record."""
        first = collection[0]
        return next((m for m in self.config.collection_label_methods if hasattr(first, m)), None)

    def create_boolean_collection(self, options: dict[str, Any]) -> dict[str, bool]:
        """Yes/no collection for boolean attributes shown as select or radio."""
        translator = self.config.translator
        scope = self.config.i18n_scope
        true_label = options.pop("true", None) or translator.translate("yes", "Yes", scope)
        false_label = options.pop("false", None) or translator.translate("no", "No", scope)
        options.setdefault("value_as_class", True)
        return {true_label: True, false_label: False}

    def generate_association_input_name(self, obj: Any, method: str) -> str:
        """
        Name an association input posts to.

        ``author`` (to-one) becomes ``author_id``; ``authors`` (to-many)
        becomes ``author_ids``.
        """
        reflection = self.find_reflection(obj, method)
        if reflection is None:
            return method
        if reflection.is_collection:
            method = singularize(method)
        method = f"{method}_id"
        if reflection.is_collection:
            method = pluralize(method)
        return method

    def find_reflection(self, obj: Any, method: str) -> AssociationInfo | None:
        associations = self.reflection.associations
        if obj is None or associations is None:
            return None
        return associations.association_for(type(obj), method)

    def humanized_attribute_name(self, obj: Any, method: str) -> str:
        schema = self.reflection.schema
        if obj is not None and schema is not None:
            name = schema.human_attribute_name(type(obj), method)
            if name:
                return name
        return self.label_str(method)

    def human_object_name(self, obj: Any, object_name: str) -> str:
        schema = self.reflection.schema
        if obj is not None and schema is not None:
            name = schema.human_name(type(obj))
            if name:
                return name
        return self.label_str(object_name)

    def attribute_value(
        self,
        obj: Any,
        method: str,
        input_name: str,
        reflection: AssociationInfo | None,
        value_method: str = "id",
    ) -> Any:
        """Current value of the input, read without touching the object."""
        if obj is None:
            return None
        if input_name != method and hasattr(obj, input_name):
            return getattr(obj, input_name)
        if reflection is not None:
            related = getattr(obj, method, None)
            if reflection.is_collection:
                return [getattr(record, value_method, None) for record in related or []]
            return getattr(related, value_method, None) if related is not None else None
        return getattr(obj, method, None)
