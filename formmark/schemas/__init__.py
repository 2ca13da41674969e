"""Pydantic schemas for form definitions and their results.

- FieldType: the closed palette of field types
- FormField: discriminated union of the field variants
- FormTemplate / FormResponse: inputs of the response reporter
- ParseResult / ExportResult / FidelityReport: results with diagnostics

Example:
    from formmark.schemas import ChoiceField, field_from_dict

    field = ChoiceField(id="f1", type="select", label="Country", options=["PL", "DE"])
    same = field_from_dict({"id": "f1", "type": "select", "label": "Country",
                            "options": ["PL", "DE"]})
    assert field == same
"""

from .base import CHOICE_TYPES, KNOWN_PROPERTIES, TEXT_LIKE_TYPES, BaseFormSchema, FieldType
from .fields import (
    DEFAULT_SEPARATOR_LABEL,
    FIELD_VARIANTS,
    BaseField,
    ChoiceField,
    DateField,
    FileField,
    FormField,
    SeparatorField,
    TableField,
    TextField,
    field_from_dict,
)
from .responses import FormResponse, FormTemplate
from .results import ExportResult, FidelityError, FidelityReport, FidelityWarning, ParseResult

__all__ = [
    "BaseFormSchema",
    "FieldType",
    "TEXT_LIKE_TYPES",
    "CHOICE_TYPES",
    "KNOWN_PROPERTIES",
    "DEFAULT_SEPARATOR_LABEL",
    "FIELD_VARIANTS",
    "BaseField",
    "TextField",
    "DateField",
    "ChoiceField",
    "FileField",
    "TableField",
    "SeparatorField",
    "FormField",
    "field_from_dict",
    "FormTemplate",
    "FormResponse",
    "ParseResult",
    "ExportResult",
    "FidelityError",
    "FidelityWarning",
    "FidelityReport",
]
