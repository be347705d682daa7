"""
Configuration module for semantic-forms.

Handles environment variables and default settings. The configuration
is built once at start-up and handed to the builders by reference.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from semantic_forms.i18n import CatalogTranslator, Translator

# Load environment variables
load_dotenv()

DEFAULT_TEMPLATE_ROOT = str(Path(__file__).parent / "templates" / "forms")

DEFAULT_COLLECTION_LABEL_METHODS = [
    "to_label",
    "display_name",
    "full_name",
    "name",
    "title",
    "username",
    "login",
    "value",
    "__str__",
]

DEFAULT_FILE_METHODS = ["read", "public_filename"]


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class SemanticFormConfig:
    """Configuration settings for semantic-forms."""

    # Required-ness fallback when no validation metadata is available
    all_fields_required_by_default: bool = True

    # Label text strategy: humanize, titleize or verbatim
    label_str_method: str = "humanize"

    # Accessors probed, in order, to label collection records
    collection_label_methods: list[str] = field(
        default_factory=lambda: list(DEFAULT_COLLECTION_LABEL_METHODS)
    )

    # Attributes that mark a value as an uploaded file
    file_methods: list[str] = field(default_factory=lambda: list(DEFAULT_FILE_METHODS))

    # Template settings
    template_root: str = DEFAULT_TEMPLATE_ROOT

    # Buttons available to SemanticFormBuilder.button()
    button_names: list[str] = field(default_factory=lambda: ["commit"])

    # Localisation
    translator: Translator = field(default_factory=CatalogTranslator)
    i18n_scope: str = "semantic_forms"

    # Output settings
    verbose_output: bool = False

    @classmethod
    def from_env(cls) -> "SemanticFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            all_fields_required_by_default=_env_bool(
                "SEMANTIC_FORMS_REQUIRED_BY_DEFAULT", _defaults.all_fields_required_by_default
            ),
            label_str_method=os.getenv("SEMANTIC_FORMS_LABEL_STR_METHOD", _defaults.label_str_method),
            collection_label_methods=_env_list(
                "SEMANTIC_FORMS_COLLECTION_LABEL_METHODS", _defaults.collection_label_methods
            ),
            file_methods=_env_list("SEMANTIC_FORMS_FILE_METHODS", _defaults.file_methods),
            template_root=os.getenv("SEMANTIC_FORMS_TEMPLATE_ROOT", _defaults.template_root),
            button_names=_env_list("SEMANTIC_FORMS_BUTTON_NAMES", _defaults.button_names),
            i18n_scope=os.getenv("SEMANTIC_FORMS_I18N_SCOPE", _defaults.i18n_scope),
            verbose_output=_env_bool("SEMANTIC_FORMS_VERBOSE_OUTPUT", _defaults.verbose_output),
        )


config = SemanticFormConfig.from_env()


def get_config() -> SemanticFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> SemanticFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
