"""
Field descriptor models.

A FieldDescriptor describes everything a template needs to render one
input. It is rebuilt for every ``input()`` call and never persisted.
"""

from typing import Any, NamedTuple

from pydantic import BaseModel, Field

from semantic_forms.models.metadata import AssociationInfo


def form_value(value: Any) -> str:
    """String form of a value as it is posted back: True -> "true"."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CollectionOption(NamedTuple):
    """One entry of a select or radio collection."""

    label: Any
    value: Any


class FieldDescriptor(BaseModel):
    """Resolved configuration for a single form input."""

    name: str = Field(..., description="Attribute name passed to input()")
    input_type: str = Field(..., alias="as", description="Widget kind: string, select, date, ...")
    required: bool = Field(default=True, description="Whether the input is marked as required")
    label: str = Field(..., description="Label text")
    hint: str | None = Field(default=None, description="Inline hint text")

    # HTML attribute overrides
    input_html: dict[str, Any] = Field(default_factory=dict)
    label_html: dict[str, Any] = Field(default_factory=dict)
    wrapper_html: dict[str, Any] = Field(default_factory=dict)

    # Naming
    input_name: str = Field(..., description="Attribute name the input posts to (author_id, tag_ids)")
    html_id: str = Field(default="", description="id of the wrapping li")
    input_id: str = Field(default="", description="id of the input element")
    param_name: str = Field(default="", description="Request parameter name, eg post[title]")
    object_name: str = Field(default="", description="Human name of the model")

    # Data
    value: Any = Field(default=None, description="Current attribute value")
    errors: list[str] | None = Field(default=None, description="Error messages for the attribute")
    collection: list[Any] | None = Field(default=None, description="Options for select and radio inputs")
    reflection: AssociationInfo | None = Field(default=None)
    multiple: bool = Field(default=False, description="Whether several values can be chosen")

    # Widget options
    checked_value: Any = "1"
    unchecked_value: Any = "0"
    include_blank: bool = True
    priority_zones: list[str] | None = None
    input_options: dict[str, Any] = Field(default_factory=dict)
    extras: dict[str, Any] = Field(default_factory=dict, description="Options not understood by the resolver")

    model_config = {"populate_by_name": True, "arbitrary_types_allowed": True}

    @property
    def wrapper_attributes(self) -> dict[str, Any]:
        """Attributes for the wrapping li, with the state classes merged in."""
        classes = [self.input_type, "required" if self.required else "optional"]
        if self.errors:
            classes.append("error")
        attributes = dict(self.wrapper_html)
        if attributes.get("class"):
            classes.append(str(attributes["class"]))
        attributes["class"] = " ".join(classes)
        attributes.setdefault("id", self.html_id)
        return attributes

    @property
    def input_attributes(self) -> dict[str, Any]:
        """Attributes for the input element itself."""
        attributes: dict[str, Any] = {"id": self.input_id, "name": self.param_name}
        if self.multiple:
            attributes["multiple"] = "multiple"
        attributes.update(self.input_html)
        return attributes

    @property
    def options(self) -> list[CollectionOption]:
        """Collection entries as (label, value) pairs; bare values label themselves."""
        pairs = []
        for entry in self.collection or []:
            if isinstance(entry, (tuple, list)) and len(entry) == 2:
                pairs.append(CollectionOption(*entry))
            else:
                pairs.append(CollectionOption(entry, entry))
        return pairs

    def is_selected(self, option_value: Any) -> bool:
        """Whether ``option_value`` is among the current values."""
        if self.value is None:
            return False
        current = self.value if isinstance(self.value, (list, tuple, set)) else [self.value]
        return form_value(option_value) in {form_value(v) for v in current}
