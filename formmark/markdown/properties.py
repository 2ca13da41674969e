"""Validating builder that turns parsed section parts into field models.

Applies the type-specific property rules of the markdown grammar while
constructing the model, raising a typed :class:`FieldPropertyError`
(or subclass) on the first violation.  Non-fatal findings (empty option
lists, unknown keys) are appended to the caller's ``warnings`` list and
logged.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional

from pydantic import ValidationError

from ..core.config import FormMarkConfig
from ..core.exceptions import (
    EmptyColumnsError,
    FieldPropertyError,
    InvalidAcceptedFileTypesError,
    InvalidColumnsError,
    InvalidMaxFileSizeError,
    InvalidMultipleError,
    InvalidOptionsError,
    MissingColumnsError,
    MissingOptionsError,
)
from ..schemas.base import CHOICE_TYPES, KNOWN_PROPERTIES, TEXT_LIKE_TYPES, FieldType
from ..schemas.fields import FIELD_VARIANTS, BaseField
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Properties each type understands; anything else in the bag is only warned about.
APPLICABLE_PROPERTIES: dict[FieldType, frozenset[str]] = {
    **{t: frozenset({"placeholder"}) for t in TEXT_LIKE_TYPES},
    **{t: frozenset({"options"}) for t in CHOICE_TYPES},
    FieldType.DATE: frozenset(),
    FieldType.FILE: frozenset({"acceptedFileTypes", "maxFileSize", "multiple"}),
    FieldType.TABLE: frozenset({"columns"}),
    FieldType.SEPARATOR: frozenset(),
}

_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "0"})


def js_string(value: Any) -> str:
    """Stringify a JSON value the way the form editor displays it.

    ``True`` -> ``"true"``, ``None`` -> ``"null"``, ``2.0`` -> ``"2"``;
    nested arrays/objects are written back as compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def coerce_positive_number(value: Any, label: str) -> float:
    """Coerce ``maxFileSize`` to a positive finite number."""
    if isinstance(value, bool):
        number = float(value)
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidMaxFileSizeError(
                f"maxFileSize must be a positive number, got {value!r}", field=label
            ) from None
    else:
        raise InvalidMaxFileSizeError(
            f"maxFileSize must be a positive number, got {value!r}", field=label
        )

    if math.isnan(number) or math.isinf(number) or number <= 0:
        raise InvalidMaxFileSizeError(
            f"maxFileSize must be a positive number, got {value!r}", field=label
        )
    return number


def coerce_bool(value: Any, label: str) -> bool:
    """Coerce ``multiple`` to a boolean; JSON ``null`` reads as false."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and not (isinstance(value, float) and math.isnan(value)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidMultipleError(f"multiple must be a boolean, got {value!r}", field=label)


class FieldBuilder:
    """Builds one field model from the parts of a parsed section.

    Usage::

        builder = FieldBuilder(config)
        warnings: list[str] = []
        field = builder.build(
            field_id="field_1",
            field_type=FieldType.SELECT,
            label="Country",
            required=True,
            help_text=None,
            properties={"options": ["PL", "DE"]},
            warnings=warnings,
        )
    """

    def __init__(self, config: Optional[FormMarkConfig] = None):
        self.config = config or FormMarkConfig()

    def build(
        self,
        field_id: str,
        field_type: FieldType,
        label: str,
        required: bool,
        help_text: Optional[str],
        properties: dict[str, Any],
        warnings: Optional[list[str]] = None,
    ) -> BaseField:
        """Validate ``properties`` for ``field_type`` and construct the model.

        Raises:
            FieldPropertyError: A type-specific rule failed (subclass names which).
        """
        if warnings is None:
            warnings = []

        field_type = FieldType(field_type)
        data: dict[str, Any] = {
            "id": field_id,
            "type": field_type.value,
            "label": label,
            "required": required,
            "help_text": help_text,
        }

        if field_type in TEXT_LIKE_TYPES:
            data.update(self._text_properties(properties))
        elif field_type in CHOICE_TYPES:
            data.update(self._choice_properties(field_type, label, properties, warnings))
        elif field_type is FieldType.FILE:
            data.update(self._file_properties(label, properties))
        elif field_type is FieldType.TABLE:
            data.update(self._table_properties(label, properties))
        elif field_type is FieldType.SEPARATOR:
            data["required"] = False
            if not label.strip():
                data["label"] = self.config.default_separator_label

        self._warn_ignored(field_type, label, properties, warnings)

        try:
            return FIELD_VARIANTS[field_type].model_validate(data)
        except ValidationError as e:
            raise FieldPropertyError(
                f"Invalid field definition: {e.errors()[0]['msg']}", field=label
            ) from e

    # -- per-type rules --------------------------------------------------

    @staticmethod
    def _text_properties(properties: dict[str, Any]) -> dict[str, Any]:
        placeholder = properties.get("placeholder")
        if placeholder:
            return {"placeholder": js_string(placeholder)}
        return {}

    @staticmethod
    def _choice_properties(
        field_type: FieldType, label: str, properties: dict[str, Any], warnings: list[str]
    ) -> dict[str, Any]:
        if "options" not in properties or properties["options"] is None:
            raise MissingOptionsError(
                f"Field type '{field_type.value}' requires an \"options\" array. "
                f'Example: {{"options": ["Option 1", "Option 2"]}}',
                field=label,
            )
        options = properties["options"]
        if not isinstance(options, list):
            raise InvalidOptionsError("options must be an array", field=label)

        if not options:
            message = (
                f"Field '{label}' of type '{field_type.value}' has an empty options array. "
                "Consider adding options."
            )
            logger.warning(message)
            warnings.append(message)

        return {"options": [js_string(o) for o in options]}

    @staticmethod
    def _file_properties(label: str, properties: dict[str, Any]) -> dict[str, Any]:
        data: dict[str, Any] = {}

        if properties.get("acceptedFileTypes") is not None:
            accepted = properties["acceptedFileTypes"]
            if not isinstance(accepted, list):
                raise InvalidAcceptedFileTypesError("acceptedFileTypes must be an array", field=label)
            data["accepted_file_types"] = [js_string(t) for t in accepted]

        if "maxFileSize" in properties:
            data["max_file_size"] = coerce_positive_number(properties["maxFileSize"], label)

        if "multiple" in properties:
            data["multiple"] = coerce_bool(properties["multiple"], label)

        return data

    @staticmethod
    def _table_properties(label: str, properties: dict[str, Any]) -> dict[str, Any]:
        if "columns" not in properties or properties["columns"] is None:
            raise MissingColumnsError(
                'Field type "table" requires a "columns" array. '
                'Example: {"columns": ["Column 1", "Column 2"]}',
                field=label,
            )
        columns = properties["columns"]
        if not isinstance(columns, list):
            raise InvalidColumnsError("columns must be an array", field=label)
        if not columns:
            raise EmptyColumnsError("A table must have at least one column", field=label)
        return {"columns": [js_string(c) for c in columns]}

    # -- diagnostics -----------------------------------------------------

    @staticmethod
    def _warn_ignored(
        field_type: FieldType, label: str, properties: dict[str, Any], warnings: list[str]
    ) -> None:
        applicable = APPLICABLE_PROPERTIES[field_type]
        for key in properties:
            if key not in KNOWN_PROPERTIES:
                message = f"Unknown property '{key}' for field '{label}' of type '{field_type.value}'"
            elif key not in applicable:
                message = f"Property '{key}' does not apply to field '{label}' of type '{field_type.value}' and was ignored"
            else:
                continue
            logger.warning(message)
            warnings.append(message)
