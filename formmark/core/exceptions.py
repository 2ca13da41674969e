"""
Custom exceptions for the formmark form-definition grammar.

Provides specific exception types for each way a markdown section can
fail to become a form field, with the section label and field name
attached for error reporting.
"""

from __future__ import annotations

from dataclasses import dataclass


class FormMarkError(Exception):
    """Base exception for all formmark errors.

    Attributes:
        message: Human-readable error description.
        section: Label of the markdown section that failed (``None`` if unknown).
        field: Field label involved (``None`` if not field-specific).
    """

    def __init__(self, message: str, section: str | None = None, field: str | None = None):
        self.message = message
        self.section = section
        self.field = field

        # Build descriptive error message
        error_parts = [message]
        if section is not None:
            error_parts.append(f"Section: {section}")
        if field is not None:
            error_parts.append(f"Field: {field}")

        super().__init__(" | ".join(error_parts))


class MarkdownParseError(FormMarkError):
    """Raised when a markdown section cannot be turned into a field.

    ``parse_markdown`` catches these per section and reports them as
    :class:`SectionError` records; ``parse_section`` lets them propagate.
    """

    pass


class MissingHeaderError(MarkdownParseError):
    """Raised when a section does not start with a ``##`` header line."""

    pass


class EmptyLabelError(MarkdownParseError):
    """Raised when the ``##`` header carries no label text."""

    pass


class InvalidFieldTypeError(MarkdownParseError):
    """Raised when the ``[type]`` token names an unknown field type."""

    pass


class MissingFieldTypeError(InvalidFieldTypeError):
    """Raised when a section has no ``[type]`` configuration line at all."""

    pass


class InvalidPropertiesError(MarkdownParseError):
    """Raised when the ``{...}`` block is not a strict-JSON object.

    Common causes:
        - Unquoted keys (``{options: ["a"]}``).
        - Single-quoted strings or trailing commas.
        - ``NaN`` / ``Infinity`` literals.
    """

    pass


class FieldPropertyError(MarkdownParseError):
    """Base for type-specific property violations (options, columns, file settings)."""

    pass


class MissingOptionsError(FieldPropertyError):
    """Raised when a select/radio/checkbox field has no ``options`` key."""

    pass


class InvalidOptionsError(FieldPropertyError):
    """Raised when ``options`` is present but is not an array."""

    pass


class MissingColumnsError(FieldPropertyError):
    """Raised when a table field has no ``columns`` key."""

    pass


class InvalidColumnsError(FieldPropertyError):
    """Raised when ``columns`` is present but is not an array."""

    pass


class EmptyColumnsError(FieldPropertyError):
    """Raised when a table field's ``columns`` array is empty."""

    pass


class InvalidMaxFileSizeError(FieldPropertyError):
    """Raised when ``maxFileSize`` is not a positive finite number."""

    pass


class InvalidAcceptedFileTypesError(FieldPropertyError):
    """Raised when ``acceptedFileTypes`` is not an array."""

    pass


class InvalidMultipleError(FieldPropertyError):
    """Raised when ``multiple`` cannot be read as a boolean."""

    pass


class ConfigurationError(FormMarkError):
    """Raised when configuration is invalid."""

    pass


@dataclass
class SectionError:
    """Per-section failure record for partial parse results."""

    section: str
    error: str
    error_type: str = ""

    @classmethod
    def from_exception(cls, section: str, exc: BaseException) -> SectionError:
        message = exc.message if isinstance(exc, FormMarkError) else str(exc)
        return cls(section=section, error=message, error_type=type(exc).__name__)

    def __str__(self) -> str:
        return f"SectionError(section='{self.section}', {self.error_type}: {self.error})"
