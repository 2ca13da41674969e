"""Split a markdown form definition into per-field sections.

A ``##`` line opens a section.  A horizontal rule (three or more hyphens)
closes the open section and stands for a separator field; standalone HTML
comments directly above the rule carry that separator's label and help
text, the way :mod:`formmark.markdown.exporter` writes them::

    <!-- Contact details -->
    <!-- Filled in by the applicant -->
    ---

Everything before the first section (the ``# Title`` and description)
is dropped.
"""

from __future__ import annotations

import re
from typing import Optional

from ..core.config import FormMarkConfig

HEADER_MARKER = "##"
SEPARATOR_TOKEN = "[separator]"

RULE_RE = re.compile(r"^-{3,}$")
COMMENT_RE = re.compile(r"^<!--\s*(.*?)\s*-->$")


def is_horizontal_rule(line: str) -> bool:
    return bool(RULE_RE.match(line.strip()))


def comment_text(line: str) -> Optional[str]:
    """Text of a single-line ``<!-- ... -->`` comment, else ``None``."""
    match = COMMENT_RE.match(line.strip())
    return match.group(1) if match else None


def separator_section(label: str, help_text: Optional[str] = None) -> list[str]:
    lines = [f"{HEADER_MARKER} {label}", SEPARATOR_TOKEN]
    if help_text:
        lines.append(help_text)
    return lines


def split_into_sections(markdown: str, config: Optional[FormMarkConfig] = None) -> list[str]:
    """Partition ``markdown`` into ordered section strings, one per field.

    Args:
        markdown: Raw form definition.
        config: Supplies the label of separators written as a bare ``---``.

    Returns:
        Section strings in document order; blank sections are discarded.
    """
    config = config or FormMarkConfig()

    sections: list[str] = []
    current: list[str] = []
    # Comment lines held back until we know whether a rule follows them.
    pending: list[tuple[str, str]] = []

    def flush_section() -> None:
        if current:
            sections.append("\n".join(current))

    def release_pending() -> None:
        if current:
            current.extend(raw for raw, _ in pending)
        pending.clear()

    for line in markdown.splitlines():
        stripped = line.strip()

        text = comment_text(stripped)
        if text is not None:
            pending.append((line, text))
            continue

        if RULE_RE.match(stripped):
            comments = [text for _, text in pending if text]
            pending.clear()
            flush_section()
            label = comments[0] if comments else config.default_separator_label
            help_text = " ".join(comments[1:]) or None
            current = separator_section(label, help_text)
            continue

        release_pending()

        if stripped.startswith(HEADER_MARKER):
            flush_section()
            current = [line]
        elif current:
            current.append(line)

    release_pending()
    flush_section()

    return [section for section in sections if section.strip()]
