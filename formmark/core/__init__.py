"""
Core configuration and error types for formmark.
"""

from .config import FormMarkConfig
from .exceptions import (
    ConfigurationError,
    EmptyColumnsError,
    EmptyLabelError,
    FieldPropertyError,
    FormMarkError,
    InvalidAcceptedFileTypesError,
    InvalidColumnsError,
    InvalidFieldTypeError,
    InvalidMaxFileSizeError,
    InvalidMultipleError,
    InvalidOptionsError,
    InvalidPropertiesError,
    MarkdownParseError,
    MissingColumnsError,
    MissingFieldTypeError,
    MissingHeaderError,
    MissingOptionsError,
    SectionError,
)

__all__ = [
    'FormMarkConfig',
    'FormMarkError',
    'MarkdownParseError',
    'MissingHeaderError',
    'EmptyLabelError',
    'InvalidFieldTypeError',
    'MissingFieldTypeError',
    'InvalidPropertiesError',
    'FieldPropertyError',
    'MissingOptionsError',
    'InvalidOptionsError',
    'MissingColumnsError',
    'InvalidColumnsError',
    'EmptyColumnsError',
    'InvalidMaxFileSizeError',
    'InvalidAcceptedFileTypesError',
    'InvalidMultipleError',
    'ConfigurationError',
    'SectionError',
]
