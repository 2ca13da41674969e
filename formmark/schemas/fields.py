"""Form field models: a tagged union keyed on ``type``.

Each variant holds only the properties that are legal for its field
types, so an ``options`` list can never appear on a date field and a
``columns`` list can never appear on a select.  ``FormField`` is the
discriminated union; :func:`field_from_dict` loads stored field dicts
(camelCase or snake_case) into the right variant.

The models accept what a form editor may legitimately hold (a choice
field without options yet, a table with no columns yet).  The strict
rules that a markdown definition must satisfy live in
:class:`formmark.markdown.properties.FieldBuilder`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from .base import BaseFormSchema, FieldType

DEFAULT_SEPARATOR_LABEL = "Separator"


class BaseField(BaseFormSchema):
    """Attributes shared by every field variant.

    Attributes:
        id: Opaque unique identifier (assigned by the parser, never in markdown).
        type: The field type; the discriminator of the union.
        label: Display name, written as the ``##`` section header.
        required: Whether a response must supply a value.
        help_text: Free text shown under the field.
    """

    id: str
    type: str
    label: str
    required: bool = False
    help_text: Optional[str] = None

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("label cannot be empty")
        return v

    @field_validator("help_text")
    @classmethod
    def normalize_help_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def field_type(self) -> FieldType:
        return FieldType(self.type)

    def property_bag(self) -> dict[str, Any]:
        """Wire-format properties for the ``{...}`` block (set values only)."""
        return {}


class TextField(BaseField):
    """Single- or multi-line text input, email or number."""

    type: Literal["text", "textarea", "email", "number"]
    placeholder: Optional[str] = None

    @field_validator("placeholder")
    @classmethod
    def normalize_placeholder(cls, v: Optional[str]) -> Optional[str]:
        return v if v else None

    def property_bag(self) -> dict[str, Any]:
        return {"placeholder": self.placeholder} if self.placeholder else {}


class DateField(BaseField):
    type: Literal["date"]


class ChoiceField(BaseField):
    """Select, radio or checkbox field.

    ``options`` is always a list after validation; an empty list is
    permitted (the exporter and parser warn about it).
    """

    type: Literal["select", "radio", "checkbox"]
    options: list[str] = Field(default_factory=list)

    def property_bag(self) -> dict[str, Any]:
        return {"options": list(self.options)}


class FileField(BaseField):
    """File upload field.

    Attributes:
        accepted_file_types: Extensions or MIME types, e.g. ``[".pdf", ".doc"]``.
        max_file_size: Upper bound per file, in megabytes.
        multiple: Whether several files may be uploaded.
    """

    type: Literal["file"]
    accepted_file_types: Optional[list[str]] = None
    max_file_size: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    multiple: Optional[bool] = None

    def property_bag(self) -> dict[str, Any]:
        bag: dict[str, Any] = {}
        if self.accepted_file_types is not None:
            bag["acceptedFileTypes"] = list(self.accepted_file_types)
        if self.max_file_size is not None:
            size = self.max_file_size
            bag["maxFileSize"] = int(size) if float(size).is_integer() else size
        if self.multiple is not None:
            bag["multiple"] = self.multiple
        return bag


class TableField(BaseField):
    """Repeating-row table field; ``columns`` names the cells of each row."""

    type: Literal["table"]
    columns: list[str] = Field(default_factory=list)

    def property_bag(self) -> dict[str, Any]:
        return {"columns": list(self.columns)}


class SeparatorField(BaseField):
    """Presentational divider; carries only a label and help text.

    A blank label becomes ``DEFAULT_SEPARATOR_LABEL`` here, independent of any
    ``FormMarkConfig``.  The parser substitutes ``config.default_separator_label``
    before the model is built, and the exporter writes any label other than the
    configured default as an explicit comment, so the label round-trips.
    """

    type: Literal["separator"]
    label: str = DEFAULT_SEPARATOR_LABEL

    @model_validator(mode="before")
    @classmethod
    def default_label(cls, data: Any) -> Any:
        if isinstance(data, dict):
            label = data.get("label")
            if label is None or not str(label).strip():
                data = {**data, "label": DEFAULT_SEPARATOR_LABEL}
        return data

    @field_validator("required")
    @classmethod
    def never_required(cls, v: bool) -> bool:
        return False


FormField = Annotated[
    Union[TextField, DateField, ChoiceField, FileField, TableField, SeparatorField],
    Field(discriminator="type"),
]

FIELD_VARIANTS: dict[FieldType, type[BaseField]] = {
    FieldType.TEXT: TextField,
    FieldType.TEXTAREA: TextField,
    FieldType.EMAIL: TextField,
    FieldType.NUMBER: TextField,
    FieldType.DATE: DateField,
    FieldType.SELECT: ChoiceField,
    FieldType.RADIO: ChoiceField,
    FieldType.CHECKBOX: ChoiceField,
    FieldType.FILE: FileField,
    FieldType.TABLE: TableField,
    FieldType.SEPARATOR: SeparatorField,
}

_field_adapter: TypeAdapter = TypeAdapter(FormField)


def field_from_dict(data: Any) -> BaseField:
    """Validate a stored field dict into its variant model.

    Field instances are returned unchanged.

    Raises:
        pydantic.ValidationError: If the dict does not describe a valid field.
    """
    if isinstance(data, BaseField):
        return data
    return _field_adapter.validate_python(data)
