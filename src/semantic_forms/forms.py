"""
Semantic form entry point.

Wraps a SemanticFormBuilder in a ``<form>`` tag carrying the
``formtastic`` class and the model name, the way view code expects.
"""

from typing import Any, Callable

from markupsafe import Markup

from semantic_forms.builder import SemanticFormBuilder
from semantic_forms.config import SemanticFormConfig, get_config
from semantic_forms.dispatcher import TemplateDispatcher, get_dispatcher
from semantic_forms.inflections import underscore
from semantic_forms.logs import setup_logging
from semantic_forms.reflection.base import Reflection
from semantic_forms.resolver import InputTypeResolver

FormBlock = Callable[[SemanticFormBuilder], Any]


def _model_class_name(record_or_name: Any) -> str:
    if isinstance(record_or_name, str):
        return record_or_name
    if isinstance(record_or_name, (list, tuple)):
        return underscore(type(record_or_name[-1]).__name__)
    return underscore(type(record_or_name).__name__)


def _object_name_and_record(record_or_name: Any, obj: Any) -> tuple[str, Any]:
    if isinstance(record_or_name, str):
        return record_or_name, obj
    if isinstance(record_or_name, (list, tuple)):
        record = record_or_name[-1]
        return underscore(type(record).__name__), record
    return underscore(type(record_or_name).__name__), record_or_name


class SemanticForms:
    """
    Builds semantic forms for one application.

    Usage:
        forms = SemanticForms(reflection=Reflection.for_sqlalchemy(session))

        html = forms.form_for(
            post,
            url="/posts",
            block=lambda f: f.inputs("title", "body") + f.buttons(),
        )
    """

    def __init__(
        self,
        config: SemanticFormConfig | None = None,
        reflection: Reflection | None = None,
        dispatcher: TemplateDispatcher | None = None,
        log_to_console: bool = False,
        log_verbose: bool = False,
        log_file: str | None = None,
    ):
        """
        Initialize the form factory.

        Args:
            config: Configuration. If None, uses the process-wide config.
            reflection: Reflection capabilities for form objects.
            dispatcher: Template dispatcher. If None, uses the shared
                dispatcher for ``config.template_root``.
            log_to_console: Whether to print log records to the console.
            log_verbose: Whether to log template lookups.
            log_file: Optional file path to write log records to.
        """
        self.config = config or get_config()
        self.reflection = reflection or Reflection.none()
        self.dispatcher = dispatcher or get_dispatcher(self.config.template_root)
        self.resolver = InputTypeResolver(self.config, self.reflection)

        if log_to_console or log_file:
            setup_logging(
                console=log_to_console,
                verbose=log_verbose or self.config.verbose_output,
                file_path=log_file,
            )

    def builder(self, object_name: str, obj: Any = None, **options: Any) -> SemanticFormBuilder:
        """Create a builder sharing this factory's config, resolver and dispatcher."""
        return SemanticFormBuilder(
            object_name,
            obj,
            config=self.config,
            dispatcher=self.dispatcher,
            resolver=self.resolver,
            **options,
        )

    def form_for(
        self,
        record_or_name: Any,
        obj: Any = None,
        *,
        block: FormBlock,
        url: str | None = None,
        method: str = "post",
        html: dict[str, Any] | None = None,
        **builder_options: Any,
    ) -> Markup:
        """
        Render a form for a record.

        Args:
            record_or_name: The record, a ``[parent, record]`` list, or an
                object name (then ``obj`` is the record).
            obj: Record when ``record_or_name`` is a name.
            block: Called with the builder; returns the form body.
            url: Form action.
            method: Form method.
            html: Extra attributes for the form tag.

        Example:
            >>> forms.form_for("post", Post(), url="/posts", block=lambda f: f.inputs())
        """
        html = dict(html or {})
        class_names = str(html["class"]).split() if html.get("class") else []
        class_names.append("formtastic")
        class_names.append(_model_class_name(record_or_name))
        html["class"] = " ".join(class_names)
        if url is not None:
            html.setdefault("action", url)
        html.setdefault("method", method)

        object_name, record = _object_name_and_record(record_or_name, obj)
        builder = self.builder(object_name, record, **builder_options)
        layout = self.dispatcher.find_template("form")
        return self.dispatcher.render_with_layout(
            layout,
            {"html": html, "builder": builder},
            lambda: block(builder),
        )

    def fields_for(
        self,
        record_or_name: Any,
        obj: Any = None,
        *,
        block: FormBlock,
        **builder_options: Any,
    ) -> Markup:
        """Like form_for, without the form tag."""
        object_name, record = _object_name_and_record(record_or_name, obj)
        builder = self.builder(object_name, record, **builder_options)
        return Markup(block(builder) or "")


def semantic_form_for(
    record_or_name: Any,
    obj: Any = None,
    *,
    block: FormBlock,
    config: SemanticFormConfig | None = None,
    reflection: Reflection | None = None,
    **options: Any,
) -> Markup:
    """
    Render a semantic form in one call.

    Example:
        >>> html = semantic_form_for(
        ...     post,
        ...     url="/posts",
        ...     reflection=Reflection.for_sqlalchemy(session),
        ...     block=lambda f: f.inputs("title", "body") + f.buttons(),
        ... )
    """
    forms = SemanticForms(config=config, reflection=reflection)
    return forms.form_for(record_or_name, obj, block=block, **options)


def semantic_fields_for(
    record_or_name: Any,
    obj: Any = None,
    *,
    block: FormBlock,
    config: SemanticFormConfig | None = None,
    reflection: Reflection | None = None,
    **options: Any,
) -> Markup:
    """Render builder output for a record without a form tag."""
    forms = SemanticForms(config=config, reflection=reflection)
    return forms.fields_for(record_or_name, obj, block=block, **options)
