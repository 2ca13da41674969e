"""Render collected responses as a markdown report (write-only).

The report has a metadata header, an optional narrative description of
the form, one table row per response and a short summary.  The table is
assembled as a pandas DataFrame first; the same frame backs the CSV export.

Cell rules:
  - list of objects (table-field rows): row values joined with `` | ``,
    rows joined with ``; ``
  - list of scalars (checkbox selections): joined with ``, ``
  - object: compact JSON
  - missing / empty: ``-``
Pipes are escaped and line breaks flattened so a value can never break
the table layout.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Iterable, Optional, Union

import pandas as pd

from ..core.config import FormMarkConfig
from ..schemas.fields import BaseField, SeparatorField
from ..schemas.responses import FormResponse, FormTemplate
from ..utils.logger import get_logger
from .exporter import html_comment
from .properties import js_string

logger = get_logger(__name__)

SUBMITTED_AT_COLUMN = "Submitted At"

TemplateLike = Union[FormTemplate, dict[str, Any]]
ResponseLike = Union[FormResponse, dict[str, Any]]


# ---------------------------------------------------------------------------
# Cell formatting
# ---------------------------------------------------------------------------


def _join_item(value: Any) -> str:
    return "" if value is None else js_string(value)


def format_cell_value(value: Any) -> str:
    """Flatten one response value to text (not yet escaped for markdown)."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        if value and isinstance(value[0], dict):
            return "; ".join(
                " | ".join(_join_item(v) for v in row.values()) if isinstance(row, dict) else _join_item(row)
                for row in value
            )
        return ", ".join(_join_item(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return js_string(value)


def escape_table_cell(text: str) -> str:
    """Escape backslashes and ``|``, and replace line breaks with spaces."""
    text = text.replace("\\", "\\\\").replace("|", "\\|")
    text = text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
    return text.strip()


# ---------------------------------------------------------------------------
# Table assembly
# ---------------------------------------------------------------------------


def _load(template: TemplateLike, responses: Iterable[ResponseLike]) -> tuple[FormTemplate, list[FormResponse]]:
    if not isinstance(template, FormTemplate):
        template = FormTemplate.model_validate(template)
    loaded = [r if isinstance(r, FormResponse) else FormResponse.model_validate(r) for r in responses]
    return template, loaded


def _column_sources(template: FormTemplate, responses: list[FormResponse]) -> dict[str, str]:
    """Column label -> field id whose values fill it, in column order.

    Template fields come first (separators excluded); response keys that
    the template does not know follow, labelled by their raw id.  When two
    fields share a label the first one fills the column.
    """
    columns: dict[str, str] = {}
    known_ids: set[str] = set()

    for field in template.fields:
        if isinstance(field, SeparatorField):
            continue
        known_ids.add(field.id)
        columns.setdefault(field.label, field.id)

    for response in responses:
        for field_id in response.responses:
            if field_id not in known_ids:
                known_ids.add(field_id)
                columns.setdefault(field_id, field_id)

    return columns


def _format_timestamp(value: datetime, config: FormMarkConfig) -> str:
    return value.strftime(config.datetime_format)


def build_response_table(
    template: TemplateLike,
    responses: Iterable[ResponseLike],
    config: Optional[FormMarkConfig] = None,
) -> pd.DataFrame:
    """One row per response, one column per field label.

    The first column is the submission timestamp.  Cells hold the output
    of :func:`format_cell_value`; empty values are empty strings.
    """
    config = config or FormMarkConfig()
    template, loaded = _load(template, responses)
    sources = _column_sources(template, loaded)

    rows = []
    for response in loaded:
        row = [_format_timestamp(response.submitted_at, config)]
        row.extend(format_cell_value(response.responses.get(field_id)) for field_id in sources.values())
        rows.append(row)

    return pd.DataFrame(rows, columns=[SUBMITTED_AT_COLUMN, *sources.keys()], dtype=object)


def export_responses_to_csv(
    template: TemplateLike,
    responses: Iterable[ResponseLike],
    config: Optional[FormMarkConfig] = None,
) -> str:
    """CSV rendering of :func:`build_response_table`."""
    return build_response_table(template, responses, config).to_csv(index=False)


# ---------------------------------------------------------------------------
# Markdown report
# ---------------------------------------------------------------------------


def _definition_lines(fields: list[BaseField], config: FormMarkConfig) -> list[str]:
    lines = ["## Form Definition", ""]
    for field in fields:
        if isinstance(field, SeparatorField):
            if field.label and field.label != config.default_separator_label:
                lines.append(html_comment(field.label))
            if field.help_text:
                lines.append(html_comment(field.help_text))
            lines.extend(["---", ""])
            continue

        lines.append(f"### {field.label}")
        type_line = f"**Type:** `{field.type}`"
        if field.required:
            type_line += " *(required)*"
        lines.extend([type_line, ""])

        if field.help_text:
            lines.extend([f"**Description:** {field.help_text}", ""])
        options = getattr(field, "options", None)
        if options:
            lines.extend([f"**Options:** {', '.join(options)}", ""])
        columns = getattr(field, "columns", None)
        if columns:
            lines.extend([f"**Columns:** {', '.join(columns)}", ""])
        placeholder = getattr(field, "placeholder", None)
        if placeholder:
            lines.extend([f'**Placeholder:** "{placeholder}"', ""])
    lines.append("")
    return lines


def _table_lines(frame: pd.DataFrame, config: FormMarkConfig) -> list[str]:
    headers = [escape_table_cell(str(c)) or config.empty_cell for c in frame.columns]
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join("---" for _ in headers) + " |",
    ]
    for row in frame.itertuples(index=False, name=None):
        cells = [escape_table_cell(str(cell)) or config.empty_cell for cell in row]
        lines.append("| " + " | ".join(cells) + " |")
    return lines


def export_responses_to_markdown(
    template: TemplateLike,
    responses: Iterable[ResponseLike],
    include_form_definition: Optional[bool] = None,
    config: Optional[FormMarkConfig] = None,
    exported_at: Optional[datetime] = None,
) -> str:
    """Render a template and its responses as a markdown report.

    Args:
        template: Form title, description and fields.
        responses: Collected responses; table rows follow this order.
        include_form_definition: Inline a narrative description of the
            fields (defaults to ``config.include_form_definition``).
        config: Formatting defaults.
        exported_at: Timestamp printed in the header (defaults to now).

    Returns:
        Markdown text.  The summary's first/last submission are the
        earliest/latest timestamps, whatever order ``responses`` is in.
    """
    config = config or FormMarkConfig()
    template, loaded = _load(template, responses)
    if include_form_definition is None:
        include_form_definition = config.include_form_definition
    exported_at = exported_at or datetime.now()

    lines = [f"# Form Responses: {template.title}", ""]
    if template.description:
        lines.extend([template.description, ""])
    lines.extend([
        f"**Exported at:** {_format_timestamp(exported_at, config)}",
        f"**Total responses:** {len(loaded)}",
        "",
    ])

    if include_form_definition and template.fields:
        lines.extend(_definition_lines(template.fields, config))

    if not loaded:
        lines.extend(["## Responses", "", "No responses."])
        return "\n".join(lines) + "\n"

    lines.extend([f"## Responses ({len(loaded)})", ""])
    lines.extend(_table_lines(build_response_table(template, loaded, config), config))
    lines.append("")

    ordered = sorted(loaded, key=lambda r: r.submitted_at.timestamp())
    lines.extend([
        "## Summary",
        "",
        f"- **Total responses:** {len(loaded)}",
        f"- **First response:** {_format_timestamp(ordered[0].submitted_at, config)}",
        f"- **Last response:** {_format_timestamp(ordered[-1].submitted_at, config)}",
    ])

    logger.debug("Rendered %d responses for '%s'", len(loaded), template.title)
    return "\n".join(lines) + "\n"
