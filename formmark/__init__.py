"""
formmark - Markdown form definitions

Parses and exports form field definitions written in a compact markdown
grammar, checks that export/import round-trips are lossless, and renders
collected responses as markdown reports.
"""

# Import main classes for clean public API
from .core import FormMarkConfig, FormMarkError, MarkdownParseError, SectionError
from .markdown import (
    MarkdownExporter,
    export_responses_to_markdown,
    export_to_markdown,
    parse_markdown,
    validate_export_fidelity,
)
from .schemas import FieldType, FormField, FormResponse, FormTemplate, ParseResult, field_from_dict

__version__ = "0.1.0"
__author__ = "formmark Team"

__all__ = [
    'parse_markdown',
    'export_to_markdown',
    'MarkdownExporter',
    'validate_export_fidelity',
    'export_responses_to_markdown',
    'FieldType',
    'FormField',
    'field_from_dict',
    'FormTemplate',
    'FormResponse',
    'ParseResult',
    'FormMarkConfig',
    'FormMarkError',
    'MarkdownParseError',
    'SectionError',
]
