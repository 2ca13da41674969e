"""Serialize form fields back to the markdown definition grammar.

The output always satisfies the parser's rules: choice fields always
carry an ``options`` array and table fields always carry ``columns``,
with any correction reported as a warning instead of an error.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional, Union

from ..core.config import FormMarkConfig
from ..schemas.base import KNOWN_PROPERTIES
from ..schemas.fields import BaseField, ChoiceField, SeparatorField, TableField, field_from_dict
from ..schemas.results import ExportResult
from ..utils.logger import get_logger

logger = get_logger(__name__)

FieldLike = Union[BaseField, dict[str, Any]]


def _single_line(text: str) -> str:
    # Mirrors how the parser joins multi-line help text.
    return " ".join(line.strip() for line in text.splitlines() if line.strip())


def html_comment(text: str) -> str:
    """One-line ``<!-- ... -->`` comment; a ``-->`` inside ``text`` cannot close it early."""
    return f"<!-- {_single_line(text).replace('-->', '-- >')} -->"


class MarkdownExporter:
    """Serializes field lists to markdown.

    Stateless apart from its config; one instance may be shared.
    """

    def __init__(self, config: Optional[FormMarkConfig] = None):
        self.config = config or FormMarkConfig()

    def export(
        self,
        fields: Iterable[FieldLike],
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ExportResult:
        """Export ``fields`` (models or stored dicts) with an optional title and description."""
        warnings: list[str] = []
        blocks: list[str] = []

        if title:
            blocks.append(f"# {title}\n\n")
        if description:
            blocks.append(f"{description}\n\n")

        for raw in fields:
            field = field_from_dict(raw)
            if isinstance(field, SeparatorField):
                blocks.append(self._separator_block(field))
            else:
                blocks.append(self._field_block(field, warnings))

        return ExportResult(markdown="".join(blocks).strip(), warnings=warnings)

    # -- blocks ----------------------------------------------------------

    def _separator_block(self, field: SeparatorField) -> str:
        lines: list[str] = []
        custom_label = field.label and field.label != self.config.default_separator_label
        if custom_label or field.help_text:
            lines.append(html_comment(field.label))
        if field.help_text:
            lines.append(html_comment(field.help_text))
        lines.append("---")
        return "\n".join(lines) + "\n\n"

    def _field_block(self, field: BaseField, warnings: list[str]) -> str:
        config_line = f"[{field.type}]"
        if field.required:
            config_line += " (required)"

        properties = self._properties(field, warnings)
        if properties:
            config_line += " " + json.dumps(properties, ensure_ascii=False, separators=(",", ":"))

        block = f"## {_single_line(field.label)}\n{config_line}\n"
        if field.help_text:
            block += f"{_single_line(field.help_text)}\n"
        return block + "\n"

    def _properties(self, field: BaseField, warnings: list[str]) -> dict[str, Any]:
        bag = field.property_bag()

        if isinstance(field, ChoiceField) and not bag.get("options"):
            bag["options"] = []
            self._warn(
                warnings,
                f"Field '{field.label}' of type '{field.type}' has no options. "
                "Added an empty array for re-import compatibility.",
            )

        if isinstance(field, TableField) and not bag.get("columns"):
            bag["columns"] = list(self.config.default_table_columns)
            self._warn(
                warnings,
                f"Field '{field.label}' of type 'table' has no columns. "
                f"Added default columns {list(self.config.default_table_columns)} "
                "for re-import compatibility; the exported definition differs from the original.",
            )

        return {key: bag[key] for key in KNOWN_PROPERTIES if key in bag}

    @staticmethod
    def _warn(warnings: list[str], message: str) -> None:
        logger.warning(message)
        warnings.append(message)


def export_to_markdown(
    fields: Iterable[FieldLike],
    title: Optional[str] = None,
    description: Optional[str] = None,
    config: Optional[FormMarkConfig] = None,
) -> str:
    """Export fields to markdown text; warnings are logged only.

    Use :meth:`MarkdownExporter.export` to receive the warnings as data.
    """
    return MarkdownExporter(config).export(fields, title=title, description=description).markdown
