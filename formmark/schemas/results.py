"""Result containers returned by the parser, exporter and fidelity validator.

Diagnostics travel in these objects (``warnings`` / ``errors`` lists)
rather than only in log output, so callers can surface them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from ..core.exceptions import SectionError
from .fields import BaseField


@dataclass
class ParseResult:
    """Result from ``parse_markdown()``.

    Attributes:
        fields: Successfully parsed fields, in document order.
        errors: One record per section that failed to parse.
        warnings: Non-fatal diagnostics (empty options, unknown properties...).
    """

    fields: list[BaseField] = field(default_factory=list)
    errors: list[SectionError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """True if any section failed to parse."""
        return len(self.errors) > 0


@dataclass
class ExportResult:
    """Result from ``MarkdownExporter.export()``.

    Attributes:
        markdown: The serialized form definition.
        warnings: Corrections applied so the output re-imports cleanly.
    """

    markdown: str
    warnings: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.markdown


class FidelityError(BaseModel):
    """A property that did not survive export followed by reimport."""

    field_id: str
    field_label: str
    property: str
    original: Any = None
    reimported: Any = None
    error: str


class FidelityWarning(BaseModel):
    """A non-fatal problem seen during the reimport step."""

    field_id: str
    field_label: str
    message: str


class FidelityReport(BaseModel):
    """Outcome of ``validate_export_fidelity()``."""

    is_valid: bool
    errors: list[FidelityError] = Field(default_factory=list)
    warnings: list[FidelityWarning] = Field(default_factory=list)
