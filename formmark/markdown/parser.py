"""Markdown form-definition parser.

Grammar, one section per field::

    ## <Label>
    [<type>] (required) {"prop": value, ...}
    <optional help text, one or more lines>

    ---            (shorthand for a separator field)

``parse_markdown`` never aborts on a bad section: successfully parsed
fields and per-section errors are returned side by side in a
:class:`~formmark.schemas.results.ParseResult`.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

from ..core.config import FormMarkConfig
from ..core.exceptions import (
    EmptyLabelError,
    InvalidFieldTypeError,
    InvalidPropertiesError,
    MarkdownParseError,
    MissingFieldTypeError,
    MissingHeaderError,
    SectionError,
)
from ..schemas.base import FieldType
from ..schemas.fields import BaseField
from ..schemas.results import ParseResult
from ..utils.ids import IdGenerator, make_id_generator
from ..utils.logger import get_logger
from .properties import FieldBuilder
from .sections import HEADER_MARKER, split_into_sections

logger = get_logger(__name__)

UNKNOWN_SECTION = "Unknown section"

CONFIG_LINE_RE = re.compile(r"^\s*\[[a-z]+\]")
TYPE_TOKEN_RE = re.compile(r"\[([^\]]+)\]")
REQUIRED_RE = re.compile(r"\(\s*required\s*\??\s*\)", re.IGNORECASE)
HEADER_RE = re.compile(r"^##\s*")


@dataclass(frozen=True)
class ConfigLine:
    """Parsed ``[type] (required) {properties}`` line."""

    field_type: FieldType
    required: bool
    properties: dict[str, Any]


def is_config_line(line: str) -> bool:
    return bool(CONFIG_LINE_RE.match(line.strip()))


def header_label(line: str) -> str:
    return HEADER_RE.sub("", line.strip(), count=1).strip()


def section_label(section: str) -> str:
    """Best-effort label of a section, for error reports."""
    for line in section.split("\n"):
        if line.strip().startswith(HEADER_MARKER):
            return header_label(line) or UNKNOWN_SECTION
    return UNKNOWN_SECTION


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_properties(body: str, label: Optional[str] = None) -> dict[str, Any]:
    """Parse the inside of a ``{...}`` block as a strict JSON object.

    The body is wrapped in braces and handed to ``json.loads``; unquoted
    keys, single quotes, trailing commas and ``NaN``/``Infinity`` fail.

    Raises:
        InvalidPropertiesError: With the underlying JSON error message.
    """
    if not body.strip():
        return {}

    try:
        properties = json.loads("{" + body + "}", parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidPropertiesError(
            f'Invalid JSON properties: {e}. Use the format: "key": "value", "list": ["item1", "item2"]',
            section=label,
        ) from e

    if not isinstance(properties, dict):
        raise InvalidPropertiesError("Properties must be a JSON object", section=label)
    return properties


def parse_config_line(line: str, label: Optional[str] = None) -> ConfigLine:
    """Extract type, required flag and properties from a configuration line.

    Raises:
        MissingFieldTypeError: No ``[type]`` token.
        InvalidFieldTypeError: Unknown type.
        InvalidPropertiesError: Malformed ``{...}`` block.
    """
    type_match = TYPE_TOKEN_RE.search(line)
    if not type_match:
        raise MissingFieldTypeError(
            "Field type is required in square brackets, e.g. [text]", section=label
        )

    type_name = type_match.group(1).strip()
    if not FieldType.is_valid(type_name):
        raise InvalidFieldTypeError(
            f"Invalid field type: {type_name}. Available types: {', '.join(FieldType.values())}",
            section=label,
        )

    properties: dict[str, Any] = {}
    outside = line
    start = line.find("{")
    end = line.rfind("}")
    if start != -1 and end > start:
        properties = parse_properties(line[start + 1:end], label=label)
        # A "(required)" inside a JSON string value is data, not a flag.
        outside = line[:start] + line[end + 1:]

    required = bool(REQUIRED_RE.search(outside))

    return ConfigLine(field_type=FieldType(type_name), required=required, properties=properties)


def parse_section(
    section: str,
    config: Optional[FormMarkConfig] = None,
    id_generator: Optional[IdGenerator] = None,
    warnings: Optional[list[str]] = None,
    builder: Optional[FieldBuilder] = None,
) -> BaseField:
    """Parse one section into a field.

    Args:
        section: Section text starting with a ``##`` header.
        config: Grammar defaults.
        id_generator: Supplies the new field's id.
        warnings: Non-fatal diagnostics are appended here.
        builder: Reuse an existing :class:`FieldBuilder`.

    Raises:
        MarkdownParseError: Any subclass describing why the section is invalid.
    """
    config = config or FormMarkConfig()
    id_generator = id_generator or make_id_generator(config.id_prefix)
    builder = builder or FieldBuilder(config)

    lines = [line.strip() for line in section.split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        raise MissingHeaderError("Section is empty")

    header = lines[0]
    if not header.startswith(HEADER_MARKER):
        raise MissingHeaderError("A field must start with a ## header")

    label = header_label(header)
    if not label:
        raise EmptyLabelError("Field label cannot be empty")

    config_line: Optional[str] = None
    before: list[str] = []
    after: list[str] = []
    for line in lines[1:]:
        if config_line is None and is_config_line(line):
            config_line = line
        elif config_line is None:
            before.append(line)
        else:
            after.append(line)

    if config_line is None:
        raise MissingFieldTypeError(
            "Field type is required in square brackets, e.g. [text]", section=label
        )

    parsed = parse_config_line(config_line, label=label)
    help_text = " ".join(before + after).strip() or None

    return builder.build(
        field_id=id_generator(),
        field_type=parsed.field_type,
        label=label,
        required=parsed.required,
        help_text=help_text,
        properties=parsed.properties,
        warnings=warnings,
    )


def parse_markdown(
    markdown: str,
    config: Optional[FormMarkConfig] = None,
    id_generator: Optional[IdGenerator] = None,
) -> ParseResult:
    """Parse a whole form definition.

    Each section is parsed independently; a failing section is recorded
    in ``errors`` and the rest of the document is still parsed.

    Returns:
        ParseResult with fields in document order, section errors and warnings.
    """
    config = config or FormMarkConfig()
    id_generator = id_generator or make_id_generator(config.id_prefix)
    builder = FieldBuilder(config)
    result = ParseResult()

    for section in split_into_sections(markdown, config):
        try:
            field = parse_section(
                section,
                config=config,
                id_generator=id_generator,
                warnings=result.warnings,
                builder=builder,
            )
        except MarkdownParseError as e:
            label = section_label(section)
            logger.debug("Section '%s' failed to parse: %s", label, e)
            result.errors.append(SectionError.from_exception(label, e))
            continue
        result.fields.append(field)

    logger.debug(
        "Parsed %d fields (%d section errors)", len(result.fields), len(result.errors)
    )
    return result


def parse_markdown_fields(
    markdown: str,
    config: Optional[FormMarkConfig] = None,
    id_generator: Optional[IdGenerator] = None,
) -> list[BaseField]:
    """Parse and return only the fields, dropping section errors."""
    return parse_markdown(markdown, config=config, id_generator=id_generator).fields
