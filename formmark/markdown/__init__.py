"""
Markdown form-definition grammar: parser, exporter, fidelity check and response reports.
"""

from .exporter import MarkdownExporter, export_to_markdown
from .fidelity import compare_fields, validate_export_fidelity
from .parser import parse_config_line, parse_markdown, parse_markdown_fields, parse_properties, parse_section
from .properties import FieldBuilder
from .report import (
    build_response_table,
    escape_table_cell,
    export_responses_to_csv,
    export_responses_to_markdown,
    format_cell_value,
)
from .sections import split_into_sections
from .syntax import SyntaxDocumentation, generate_examples, get_syntax_documentation

__all__ = [
    'split_into_sections',
    'parse_section',
    'parse_config_line',
    'parse_properties',
    'parse_markdown',
    'parse_markdown_fields',
    'FieldBuilder',
    'MarkdownExporter',
    'export_to_markdown',
    'compare_fields',
    'validate_export_fidelity',
    'build_response_table',
    'escape_table_cell',
    'export_responses_to_csv',
    'export_responses_to_markdown',
    'format_cell_value',
    'SyntaxDocumentation',
    'generate_examples',
    'get_syntax_documentation',
]
