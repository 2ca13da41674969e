"""Tests for FieldBuilder: type-specific property rules."""

from __future__ import annotations

import pytest

from formmark.core.config import FormMarkConfig
from formmark.core.exceptions import (
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
from formmark.markdown.properties import FieldBuilder, coerce_bool, coerce_positive_number, js_string
from formmark.schemas import ChoiceField, DateField, FieldType, FileField, SeparatorField, TableField, TextField

# -- helpers -----------------------------------------------------------------


def _build(field_type: FieldType, properties: dict, label: str = "Field", warnings: list | None = None):
    return FieldBuilder().build(
        field_id="id_1",
        field_type=field_type,
        label=label,
        required=False,
        help_text=None,
        properties=properties,
        warnings=warnings,
    )


# -- text-like ---------------------------------------------------------------


class TestTextLike:
    @pytest.mark.parametrize("field_type", [FieldType.TEXT, FieldType.TEXTAREA, FieldType.EMAIL, FieldType.NUMBER])
    def test_placeholder_copied(self, field_type):
        field = _build(field_type, {"placeholder": "Type here"})
        assert isinstance(field, TextField)
        assert field.placeholder == "Type here"

    def test_placeholder_coerced_to_string(self):
        assert _build(FieldType.NUMBER, {"placeholder": 25}).placeholder == "25"

    def test_empty_placeholder_dropped(self):
        assert _build(FieldType.TEXT, {"placeholder": ""}).placeholder is None


# -- choice ------------------------------------------------------------------


class TestChoice:
    def test_missing_options_names_the_field(self):
        with pytest.raises(MissingOptionsError) as exc_info:
            _build(FieldType.RADIO, {}, label="Contact")
        assert exc_info.value.field == "Contact"
        assert "options" in exc_info.value.message

    def test_options_must_be_array(self):
        with pytest.raises(InvalidOptionsError):
            _build(FieldType.SELECT, {"options": "a, b"})

    def test_options_coerced_to_strings(self):
        field = _build(FieldType.CHECKBOX, {"options": [1, True, None, 2.5, 3.0]})
        assert isinstance(field, ChoiceField)
        assert field.options == ["1", "true", "null", "2.5", "3"]

    def test_empty_options_warns(self):
        warnings: list[str] = []
        field = _build(FieldType.SELECT, {"options": []}, warnings=warnings)
        assert field.options == []
        assert len(warnings) == 1


# -- file --------------------------------------------------------------------


class TestFile:
    def test_all_properties(self):
        field = _build(FieldType.FILE, {"acceptedFileTypes": [".pdf", ".doc"], "maxFileSize": 5, "multiple": True})
        assert isinstance(field, FileField)
        assert field.accepted_file_types == [".pdf", ".doc"]
        assert field.max_file_size == 5
        assert field.multiple is True

    def test_no_properties(self):
        field = _build(FieldType.FILE, {})
        assert field.accepted_file_types is None
        assert field.max_file_size is None
        assert field.multiple is None

    def test_numeric_string_size(self):
        assert _build(FieldType.FILE, {"maxFileSize": "2.5"}).max_file_size == 2.5

    @pytest.mark.parametrize("size", [0, -1, "abc", "", None, [5]])
    def test_invalid_size(self, size):
        with pytest.raises(InvalidMaxFileSizeError):
            _build(FieldType.FILE, {"maxFileSize": size})

    def test_accepted_types_must_be_array(self):
        with pytest.raises(InvalidAcceptedFileTypesError):
            _build(FieldType.FILE, {"acceptedFileTypes": ".pdf"})

    @pytest.mark.parametrize("value,expected", [(False, False), ("yes", True), ("false", False), (1, True), (0, False)])
    def test_multiple_coercion(self, value, expected):
        assert _build(FieldType.FILE, {"multiple": value}).multiple is expected

    @pytest.mark.parametrize("value", ["maybe", "", [True], {"a": 1}])
    def test_invalid_multiple(self, value):
        with pytest.raises(InvalidMultipleError):
            _build(FieldType.FILE, {"multiple": value})

    def test_null_multiple_reads_as_false(self):
        field = _build(FieldType.FILE, {"multiple": None})
        assert isinstance(field, FileField)
        assert field.multiple is False


# -- table -------------------------------------------------------------------


class TestTable:
    def test_missing_columns(self):
        with pytest.raises(MissingColumnsError):
            _build(FieldType.TABLE, {})

    def test_columns_must_be_array(self):
        with pytest.raises(InvalidColumnsError):
            _build(FieldType.TABLE, {"columns": "A"})

    def test_empty_columns(self):
        with pytest.raises(EmptyColumnsError):
            _build(FieldType.TABLE, {"columns": []})

    def test_columns_coerced(self):
        field = _build(FieldType.TABLE, {"columns": ["Name", 2]})
        assert isinstance(field, TableField)
        assert field.columns == ["Name", "2"]

    def test_property_errors_share_a_base(self):
        for exc in (MissingColumnsError, InvalidColumnsError, EmptyColumnsError, MissingOptionsError):
            assert issubclass(exc, FieldPropertyError)


# -- date and separator ------------------------------------------------------


class TestPresentational:
    def test_date_has_no_properties(self):
        warnings: list[str] = []
        field = _build(FieldType.DATE, {"options": ["a"]}, warnings=warnings)
        assert isinstance(field, DateField)
        assert "does not apply" in warnings[0]

    def test_separator_blank_label_uses_config_default(self):
        builder = FieldBuilder(FormMarkConfig(default_separator_label="Divider"))
        field = builder.build(
            field_id="s",
            field_type=FieldType.SEPARATOR,
            label="  ",
            required=True,
            help_text="Below",
            properties={},
        )
        assert isinstance(field, SeparatorField)
        assert field.label == "Divider"
        assert field.required is False
        assert field.help_text == "Below"


# -- coercion helpers --------------------------------------------------------


class TestCoercionHelpers:
    def test_js_string(self):
        assert js_string("a") == "a"
        assert js_string(False) == "false"
        assert js_string(None) == "null"
        assert js_string(4.0) == "4"
        assert js_string({"k": [1]}) == '{"k":[1]}'

    def test_coerce_positive_number(self):
        assert coerce_positive_number(" 3 ", "f") == 3.0
        with pytest.raises(InvalidMaxFileSizeError):
            coerce_positive_number(float("inf"), "f")

    def test_coerce_bool(self):
        assert coerce_bool("TRUE", "f") is True
        assert coerce_bool(None, "f") is False
        with pytest.raises(InvalidMultipleError):
            coerce_bool("sometimes", "f")
