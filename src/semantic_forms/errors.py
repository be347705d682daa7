"""Custom exception classes for the semantic_forms package."""


class SemanticFormError(Exception):
    """Base class for semantic-forms errors."""


class InputsConfigurationError(SemanticFormError, ValueError):
    """Raised when ``inputs(for_=...)`` is given a block that accepts no builder."""


class ModelLookupError(SemanticFormError, LookupError):
    """Raised when a model class cannot be resolved from an ``_id`` field name."""


class UnknownButtonError(SemanticFormError, KeyError):
    """Raised when a button name has no registered renderer."""
