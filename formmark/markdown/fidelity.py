"""Round-trip self-check: export fields, parse them back, diff the two lists."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..core.config import FormMarkConfig
from ..schemas.fields import BaseField, field_from_dict
from ..schemas.results import FidelityError, FidelityReport, FidelityWarning
from ..utils.ids import sequential_ids
from ..utils.logger import get_logger
from .exporter import FieldLike, MarkdownExporter
from .parser import parse_markdown

logger = get_logger(__name__)

# (attribute, wire name, error text)
COMPARED_PROPERTIES: tuple[tuple[str, str, str], ...] = (
    ("label", "label", "Label mismatch"),
    ("type", "type", "Type mismatch"),
    ("required", "required", "Required status mismatch"),
    ("help_text", "helpText", "Help text mismatch"),
    ("placeholder", "placeholder", "Placeholder mismatch"),
    ("options", "options", "Options array mismatch"),
    ("columns", "columns", "Columns array mismatch"),
    ("accepted_file_types", "acceptedFileTypes", "Accepted file types mismatch"),
    ("max_file_size", "maxFileSize", "Max file size mismatch"),
    ("multiple", "multiple", "Multiple files flag mismatch"),
)


def compare_fields(original: BaseField, reimported: BaseField) -> list[FidelityError]:
    """Property-by-property diff of two fields; ids are not compared."""
    errors: list[FidelityError] = []
    for attr, wire_name, message in COMPARED_PROPERTIES:
        before: Any = getattr(original, attr, None)
        after: Any = getattr(reimported, attr, None)
        if before != after:
            errors.append(
                FidelityError(
                    field_id=original.id,
                    field_label=original.label,
                    property=wire_name,
                    original=before,
                    reimported=after,
                    error=message,
                )
            )
    return errors


def validate_export_fidelity(
    fields: Iterable[FieldLike],
    title: Optional[str] = None,
    description: Optional[str] = None,
    config: Optional[FormMarkConfig] = None,
) -> FidelityReport:
    """Check that exporting and re-importing ``fields`` loses nothing.

    Never raises: any failure in the export/import pipeline becomes a
    single synthetic error in the report.
    """
    errors: list[FidelityError] = []
    warnings: list[FidelityWarning] = []

    try:
        config = config or FormMarkConfig()
        originals = [field_from_dict(f) for f in fields]

        exported = MarkdownExporter(config).export(originals, title=title, description=description)
        parsed = parse_markdown(exported.markdown, config=config, id_generator=sequential_ids("reimport"))
        reimported = parsed.fields

        for section_error in parsed.errors:
            warnings.append(
                FidelityWarning(
                    field_id="unknown",
                    field_label=section_error.section,
                    message=f"Parse error in section '{section_error.section}': {section_error.error}",
                )
            )

        if len(originals) != len(reimported):
            errors.append(
                FidelityError(
                    field_id="all",
                    field_label="Form Structure",
                    property="field_count",
                    original=len(originals),
                    reimported=len(reimported),
                    error=f"Field count mismatch: expected {len(originals)}, got {len(reimported)}",
                )
            )

        for original, copy in zip(originals, reimported):
            errors.extend(compare_fields(original, copy))

    except Exception as e:
        logger.warning("Export fidelity check failed: %s", e)
        errors.append(
            FidelityError(
                field_id="all",
                field_label="Export/Import Process",
                property="process",
                original="successful",
                reimported="failed",
                error=f"Export/import failed: {e}",
            )
        )

    if errors:
        logger.info("Export fidelity check found %d mismatches", len(errors))

    return FidelityReport(is_valid=not errors, errors=errors, warnings=warnings)
