"""
Localisation hooks.

The builder only needs a handful of strings (the yes/no labels of
boolean collections), so a translator is anything with a
``translate(key, default, scope)`` method.
"""

from typing import Any, Mapping, Protocol


class Translator(Protocol):
    """Looks up localised text."""

    def translate(self, key: str, default: str, scope: str | None = None) -> str:
        ...


class CatalogTranslator:
    """
    Translator backed by a nested dict of messages.

    Example:
        >>> t = CatalogTranslator({"semantic_forms": {"yes": "Oui"}})
        >>> t.translate("yes", "Yes", scope="semantic_forms")
        'Oui'
    """

    def __init__(self, catalog: Mapping[str, Any] | None = None):
        self.catalog = dict(catalog or {})

    def translate(self, key: str, default: str, scope: str | None = None) -> str:
        node: Any = self.catalog
        path = (scope.split(".") if scope else []) + [key]
        for part in path:
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node if isinstance(node, str) else default
