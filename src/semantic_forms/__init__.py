"""
Semantic-Forms: semantic form markup from model metadata.

Give it an object and a list of attribute names; it picks the right
widget for each one (select for associations, numeric for numbers,
password for password columns, ...) and renders a fieldset of labelled
inputs with hints, inline errors and required markers.

Simple Usage:
    from semantic_forms import Reflection, semantic_form_for

    html = semantic_form_for(
        post,
        url="/posts",
        reflection=Reflection.for_sqlalchemy(session),
        block=lambda f: f.inputs("title", "body", "author") + f.buttons(),
    )

Advanced Usage:
    from semantic_forms import SemanticForms, SemanticFormConfig

    forms = SemanticForms(
        config=SemanticFormConfig(label_str_method="titleize"),
        reflection=Reflection.for_pydantic(repository=load_all),
        log_to_console=True,
    )

    html = forms.form_for(
        "post",
        post,
        block=lambda f: f.inputs("title", name="Task #%i", for_="tasks", block=lambda t: t.input("title")),
    )

Logging:
    from semantic_forms.logs import setup_logging

    # Template lookups and collection loading
    setup_logging(console=True, verbose=True)

    # Or write to file
    setup_logging(file_path="forms.jsonl")
"""

from semantic_forms.forms import (
    SemanticForms,
    semantic_fields_for,
    semantic_form_for,
)
from semantic_forms.builder import SemanticFormBuilder
from semantic_forms.config import SemanticFormConfig, get_config, update_config
from semantic_forms.dispatcher import TemplateDispatcher
from semantic_forms.errors import (
    InputsConfigurationError,
    ModelLookupError,
    SemanticFormError,
    UnknownButtonError,
)
from semantic_forms.i18n import CatalogTranslator, Translator
from semantic_forms.logs import (
    setup_logging,
    disable_logging,
    enable_logging,
)
from semantic_forms.models import (
    AssociationInfo,
    CollectionOption,
    ColumnInfo,
    FieldDescriptor,
    FormErrors,
)
from semantic_forms.reflection import (
    PydanticReflector,
    Reflection,
    SQLAlchemyReflector,
)
from semantic_forms.resolver import InputTypeResolver

__all__ = [
    # Main interface
    "SemanticForms",
    "semantic_form_for",
    "semantic_fields_for",
    "SemanticFormBuilder",
    "InputTypeResolver",
    "TemplateDispatcher",
    # Configuration
    "SemanticFormConfig",
    "get_config",
    "update_config",
    "CatalogTranslator",
    "Translator",
    # Models
    "AssociationInfo",
    "CollectionOption",
    "ColumnInfo",
    "FieldDescriptor",
    "FormErrors",
    # Reflection
    "Reflection",
    "PydanticReflector",
    "SQLAlchemyReflector",
    # Errors
    "SemanticFormError",
    "InputsConfigurationError",
    "ModelLookupError",
    "UnknownButtonError",
    # Logging
    "setup_logging",
    "disable_logging",
    "enable_logging",
]

__version__ = "0.1.0"
