"""
Semantic form builder.

Renders inputs, fieldsets and buttons for one form object. Each input is
resolved by the InputTypeResolver and rendered through a template chosen
by the TemplateDispatcher (``<as>_input`` with ``input`` as fallback).

Example:
    builder = SemanticFormBuilder("post", post, reflection=Reflection.for_sqlalchemy(session))

    builder.inputs("title", "body", name="Create a new post")
    builder.inputs(block=lambda: builder.input("title") + builder.input("author"))
    builder.inputs("title", name="Task #%i", for_="tasks")
    builder.buttons()
"""

import inspect
import re
from functools import cached_property
from typing import Any, Callable, Iterable, Mapping

from markupsafe import Markup

from semantic_forms.config import SemanticFormConfig, get_config
from semantic_forms.dispatcher import Content, TemplateDispatcher, get_dispatcher
from semantic_forms.errors import InputsConfigurationError, UnknownButtonError
from semantic_forms.inflections import underscore
from semantic_forms.models.form_errors import FormErrors
from semantic_forms.reflection.base import Reflection
from semantic_forms.resolver import InputTypeResolver

# Columns left out of quick forms
TIMESTAMP_COLUMNS = frozenset({"created_at", "updated_at", "created_on", "updated_on"})

# One integer slot allowed in nested legends ("Task #%i")
_LEGEND_SLOT = re.compile(r"%[id]")

ButtonRenderer = Callable[["SemanticFormBuilder"], str]


def _normalize(options: Mapping[str, Any]) -> dict[str, Any]:
    """``as_`` -> ``as``, ``class_`` -> ``class``, ``for_`` -> ``for``."""
    return {(k[:-1] if len(k) > 1 and k.endswith("_") else k): v for k, v in options.items()}


def _accepts_argument(block: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(block).parameters.values()
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); let the call decide
        return True
    positional = (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL,
    )
    return any(p.kind in positional for p in parameters)


class SemanticFormBuilder:
    """
    Builds semantically structured form markup for one object.

    Args:
        object_name: Parameter prefix, eg ``post`` or ``post[tasks_attributes][0]``.
            A trailing ``[]`` enables auto-indexing by the object's id.
        obj: The form object. Never modified.
        config: Configuration; defaults to the process-wide one.
        reflection: Reflection capabilities for ``obj``.
        dispatcher: Template dispatcher; defaults to the shared one for
            ``config.template_root``.
        resolver: Pre-built resolver (nested builders share the parent's).
        errors: Error source overriding ``obj.errors``: FormErrors, a
            pydantic ValidationError or a mapping.
        index: Explicit index inserted into ids and parameter names.
    """

    def __init__(
        self,
        object_name: str,
        obj: Any = None,
        *,
        config: SemanticFormConfig | None = None,
        reflection: Reflection | None = None,
        dispatcher: TemplateDispatcher | None = None,
        resolver: InputTypeResolver | None = None,
        errors: Any = None,
        index: Any = None,
    ):
        self.config = config or get_config()
        self.resolver = resolver or InputTypeResolver(self.config, reflection)
        self.reflection = self.resolver.reflection
        self.dispatcher = dispatcher or get_dispatcher(self.config.template_root)
        self.object = obj
        self.errors = FormErrors.coerce(errors) if errors is not None else None
        self.index = index
        self.nested_child_index: dict[str, int] = {}

        object_name = str(object_name)
        self.auto_index = None
        if object_name.endswith("[]"):
            object_name = object_name[:-2]
            self.auto_index = getattr(obj, "id", None)
        self.object_name = object_name

        self._buttons: dict[str, ButtonRenderer] = {}
        for name in self.config.button_names:
            self.register_button(name)

    # Inputs ------------------------------------------------------------

    def input(self, method: str, **options: Any) -> Markup:
        """
        Render a form input for ``method``.

        Options:
            as_: Override the widget (eg force a string column to password).
            label: Label text.
            required: Mark the input as required or optional.
            hint: Inline hint text.
            collection: Options for select and radio inputs.
            input_html, label_html, wrapper_html: Extra HTML attributes.

        Example:
            >>> builder.input("manager_id", as_="radio")
            >>> builder.input("phone", required=False, hint="Eg: +1 555 1234")
        """
        descriptor = self.resolver.resolve(self.object, method, _normalize(options))
        descriptor = descriptor.model_copy(
            update={
                "html_id": self.generate_html_id(method),
                "input_id": self.generate_html_id(descriptor.input_name, None),
                "param_name": self.param_name(descriptor.input_name, descriptor.multiple),
                "object_name": self.resolver.human_object_name(self.object, self.object_name),
                "errors": self.errors_for(method),
            }
        )
        template = self.dispatcher.find_template(f"{descriptor.input_type}_input", "input")
        return self.dispatcher.render(template, {"field": descriptor, "builder": self})

    def inputs(self, *fields: str, block: Callable[..., Any] | None = None, **html_options: Any) -> Markup:
        """
        Wrap a set of inputs in a fieldset and ordered list.

        With ``block`` the fieldset wraps whatever the block returns; with
        field names it renders one input per field; with neither (and an
        object) it renders a quick form of every content column and
        to-one association. ``name`` becomes the legend, every other
        option an attribute of the fieldset. ``for_`` renders the inputs
        for nested attributes, with ``for_options`` passed to fields_for.
        """
        html_options = _normalize(html_options)
        html_options.setdefault("class", "inputs")

        if html_options.get("for"):
            return self.inputs_for_nested_attributes(list(fields), html_options, block)
        if block is not None:
            return self.field_set_and_list_wrapping("input", html_options, block=block)

        if self.object is not None and not fields:
            fields = tuple(self.quick_form_fields())
        contents = [self.input(method) for method in fields]
        return self.field_set_and_list_wrapping("input", html_options, contents)

    input_field_set = inputs

    def quick_form_fields(self) -> list[str]:
        """To-one associations followed by content columns, without timestamps."""
        model = type(self.object)
        names: list[str] = []
        if self.reflection.associations is not None:
            names += [a.name for a in self.reflection.associations.associations(model) if a.macro == "belongs_to"]
        if self.reflection.schema is not None:
            names += [c.name for c in self.reflection.schema.content_columns(model)]
        return [name for name in names if name not in TIMESTAMP_COLUMNS]

    def inputs_for_nested_attributes(
        self,
        fields: list[str],
        options: dict[str, Any],
        block: Callable[..., Any] | None,
    ) -> Markup:
        """
        Handle ``inputs(for_=...)``.

        Raises:
            InputsConfigurationError: If the block does not accept the
                nested builder.
        """
        for_value = options.pop("for")
        for_options = options.pop("for_options", None) or {}
        options["parent"] = {"builder": self, "for": for_value}

        if block is not None:
            if not _accepts_argument(block):
                raise InputsConfigurationError(
                    "You gave for_ to inputs() with a block, but the block does not accept any argument."
                )

            def fields_for_block(f: "SemanticFormBuilder") -> Markup:
                return f.inputs(*fields, block=lambda: block(f), **options)
        else:

            def fields_for_block(f: "SemanticFormBuilder") -> Markup:
                return f.inputs(*fields, **options)

        if isinstance(for_value, (list, tuple)):
            record_or_name, obj = for_value[0], (for_value[1] if len(for_value) > 1 else None)
        else:
            record_or_name, obj = for_value, None
        return self.semantic_fields_for(record_or_name, obj, block=fields_for_block, **for_options)

    # Buttons -----------------------------------------------------------

    def register_button(self, name: str, renderer: ButtonRenderer | None = None) -> None:
        """
        Make ``button(name)`` available.

        Without a renderer the button renders ``_<name>_button`` or the
        generic ``_button`` template.
        """
        self._buttons[name] = renderer or (lambda builder: builder.render_button(name))

    def button(self, name: str) -> Markup:
        try:
            renderer = self._buttons[name]
        except KeyError:
            raise UnknownButtonError(name) from None
        return Markup(renderer(self))

    def render_button(self, name: str) -> Markup:
        locals = {
            "object": self.object,
            "builder": self,
            "button_name": name,
            "new_record": self.is_new_record(),
            "object_name": self.resolver.human_object_name(self.object, self.object_name),
        }
        template = self.dispatcher.find_template(f"{name}_button", "button")
        return self.dispatcher.render(template, locals)

    def buttons(self, *names: str, block: Callable[[], Any] | None = None, **html_options: Any) -> Markup:
        """Fieldset of buttons, the configured button names by default. Class defaults to ``buttons``."""
        html_options = _normalize(html_options)
        html_options.setdefault("class", "buttons")

        if block is not None:
            return self.field_set_and_list_wrapping("button", html_options, block=block)
        contents = [self.button(name) for name in (names or tuple(self.config.button_names))]
        return self.field_set_and_list_wrapping("button", html_options, contents)

    button_field_set = buttons

    # Nesting -----------------------------------------------------------

    def fields_for(
        self,
        record_or_name: Any,
        obj: Any = None,
        *,
        block: Callable[["SemanticFormBuilder"], Any],
        child_index: Any = None,
        **options: Any,
    ) -> Markup:
        """
        Render ``block`` with builders for an associated object.

        Associations use nested attributes naming
        (``post[author_attributes]``, ``post[tasks_attributes][0]``), each
        child of a to-many association getting the next index from this
        builder's running counter. Anything else nests as ``post[name]``.
        """
        options = _normalize(options)
        if isinstance(record_or_name, str):
            name = record_or_name
        else:
            name, obj = underscore(type(record_or_name).__name__), record_or_name

        reflection = self.resolver.find_reflection(self.object, name)
        if obj is None and self.object is not None:
            obj = getattr(self.object, name, None)

        if reflection is None:
            return self._fields_for_nested_model(self._nested_name(name), obj, block, options)

        base = self._nested_name(f"{name}_attributes")
        if reflection.is_collection and isinstance(obj, (list, tuple)):
            parts = []
            for child in obj:
                index = child_index if child_index is not None else self._next_nested_child_index(name)
                parts.append(self._fields_for_nested_model(f"{base}[{index}]", child, block, options))
            return Markup("\n").join(parts)
        return self._fields_for_nested_model(base, obj, block, options)

    semantic_fields_for = fields_for

    def _nested_name(self, key: str) -> str:
        return f"{self.object_name}[{key}]" if self.object_name else key

    def _fields_for_nested_model(
        self,
        name: str,
        obj: Any,
        block: Callable[["SemanticFormBuilder"], Any],
        options: dict[str, Any],
    ) -> Markup:
        builder = type(self)(
            name,
            obj,
            config=self.config,
            dispatcher=self.dispatcher,
            resolver=self.resolver,
            **options,
        )
        builder._buttons.update(self._buttons)
        return Markup(block(builder) or "")

    def _next_nested_child_index(self, name: str) -> int:
        index = self.nested_child_index.get(name, -1) + 1
        self.nested_child_index[name] = index
        return index

    def parent_child_index(self, parent: Mapping[str, Any]) -> int:
        """1-based position of the nested item being rendered by ``parent``."""
        child = parent["for"]
        if isinstance(child, (list, tuple)):
            child = child[0]
        key = child if isinstance(child, str) else underscore(type(child).__name__)
        return parent["builder"].nested_child_index.get(key, 0) + 1

    # Wrapping ----------------------------------------------------------

    def field_set_and_list_wrapping(
        self,
        wrapper: str,
        html_options: Mapping[str, Any],
        contents: Iterable[str] | str = "",
        block: Content | None = None,
    ) -> Markup:
        """
        Fieldset with an ordered list around ``contents`` or ``block``.

        With a parent builder (nested attributes) the legend may contain
        one ``%i`` slot, replaced by the item's position: ``"Task #%i"``
        renders ``Task #1``, ``Task #2``, ...
        """
        html_options = dict(html_options)
        legend = str(html_options.pop("name", "") or "")
        parent = html_options.pop("parent", None)
        if parent and _LEGEND_SLOT.search(legend):
            legend = _LEGEND_SLOT.sub(str(self.parent_child_index(parent)), legend, count=1)

        if block is None:
            block = contents if isinstance(contents, str) else Markup("\n").join(contents)

        layout = self.dispatcher.find_template(f"{wrapper}_wrapper", "wrapper")
        locals = {"html": html_options, "legend": legend, "wrapper": wrapper}
        return self.dispatcher.render_with_layout(layout, locals, block)

    # Naming ------------------------------------------------------------

    @cached_property
    def sanitized_object_name(self) -> str:
        return re.sub(r"_$", "", re.sub(r"\]\[|[^-a-zA-Z0-9:.]", "_", self.object_name))

    def _index_segment(self) -> str | None:
        if self.index is not None:
            return str(self.index)
        if self.auto_index is not None:
            return str(self.auto_index)
        return None

    def generate_html_id(self, method_name: str, value: str | None = "input") -> str:
        """
        Html id for an input's li (``post_title_input``) or, with
        ``value=None``, the input itself (``post_title``).
        """
        index = self._index_segment()
        index = f"_{index}" if index is not None else ""
        sanitized_method_name = re.sub(r"\?$", "", str(method_name))
        html_id = f"{self.sanitized_object_name}{index}_{sanitized_method_name}".lstrip("_")
        return f"{html_id}_{value}" if value else html_id

    def param_name(self, input_name: str, multiple: bool = False) -> str:
        """Request parameter name, eg ``post[title]`` or ``post[tag_ids][]``."""
        if not self.object_name:
            name = input_name
        else:
            index = self._index_segment()
            index = f"[{index}]" if index is not None else ""
            name = f"{self.object_name}{index}[{input_name}]"
        return f"{name}[]" if multiple else name

    # Object state ------------------------------------------------------

    def errors_for(self, method: str) -> list[str] | None:
        """Error messages for ``method``; None when the object has no errors."""
        if self.errors is not None:
            return self.errors.messages_for(method)

        source = getattr(self.object, "errors", None) if self.object is not None else None
        if isinstance(source, FormErrors):
            return source.messages_for(method)
        if not isinstance(source, Mapping):
            return None
        messages = source.get(method)
        if messages is None:
            return []
        return [messages] if isinstance(messages, str) else list(messages)

    def is_new_record(self) -> bool | None:
        schema = self.reflection.schema
        if self.object is None or schema is None:
            return None
        return schema.is_new_record(self.object)
