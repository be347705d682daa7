"""
Template dispatch and rendering.

Templates live under a single root and follow the ``_<name>.html.*``
naming convention (``_select_input.html.jinja``). The dispatcher picks
the first existing template among a list of candidates and remembers the
choice for the lifetime of the process: template sets are assumed not to
change after start-up.
"""

import functools
from pathlib import Path
from typing import Any, Callable
from zoneinfo import available_timezones

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from semantic_forms.logs import logger
from semantic_forms.models.field_descriptor import form_value

Content = str | Callable[[], str]


@functools.lru_cache(maxsize=1)
def all_time_zones() -> list[str]:
    """Sorted IANA zone names for time zone selects."""
    return sorted(available_timezones())


def strftime(value: Any, fmt: str) -> str:
    """Format dates for date/time inputs; strings pass through."""
    if value is None:
        return ""
    if hasattr(value, "strftime"):
        return value.strftime(fmt)
    return str(value)


class TemplateDispatcher:
    """
    Resolves template candidates against a template root and renders them.

    Usage:
        dispatcher = TemplateDispatcher("/srv/app/templates/forms")
        ref = dispatcher.find_template("select_input", "input")
        html = dispatcher.render(ref, {"field": descriptor})
    """

    def __init__(self, template_root: str | Path):
        self.template_root = Path(template_root)
        self._find_template_cache: dict[tuple[str, ...], str] = {}
        self.environment = Environment(
            loader=FileSystemLoader(str(self.template_root)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.environment.globals["time_zones"] = all_time_zones
        self.environment.filters["form_value"] = form_value
        self.environment.filters["strftime"] = strftime

    def template_exists(self, name: str) -> bool:
        """Checks to make sure the template exists."""
        return self._match(name) is not None

    def _match(self, name: str) -> str | None:
        matches = sorted(self.template_root.glob(f"_{name}.html.*"))
        return matches[0].name if matches else None

    def find_template(self, *choices: str) -> str:
        """
        Return the template reference for the first existing choice.

        Falls back to the conventional name of the first choice when none
        exists, leaving the renderer to raise TemplateNotFound.
        """
        cached = self._find_template_cache.get(choices)
        if cached is not None:
            return cached

        for choice in choices:
            if self.template_exists(choice):
                ref = self._match(choice)
                logger.debug(f"Template for {choices}: {ref}")
                break
        else:
            ref = f"_{choices[0]}.html"
            logger.debug(f"No template found for {choices}; falling back to {ref}")

        self._find_template_cache[choices] = ref
        return ref

    def render(self, ref: str, locals: dict[str, Any]) -> Markup:
        """Render a template with the given locals."""
        return Markup(self.environment.get_template(ref).render(**locals))

    def render_with_layout(self, ref: str, locals: dict[str, Any], content: Content) -> Markup:
        """
        Render a layout template around some content.

        Args:
            ref: Layout template reference.
            locals: Variables for the layout.
            content: Pre-rendered markup, or a zero-argument callable
                producing it.
        """
        body = content() if callable(content) else content
        return self.render(ref, {**locals, "content": Markup(body or "")})


@functools.lru_cache(maxsize=None)
def get_dispatcher(template_root: str) -> TemplateDispatcher:
    """Shared dispatcher per template root."""
    return TemplateDispatcher(template_root)
