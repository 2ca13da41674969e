"""Tests for the response report (markdown table and CSV)."""

from __future__ import annotations

from datetime import datetime

import pytest

from formmark.core.config import FormMarkConfig
from formmark.markdown.report import (
    SUBMITTED_AT_COLUMN,
    build_response_table,
    escape_table_cell,
    export_responses_to_csv,
    export_responses_to_markdown,
    format_cell_value,
)

EXPORTED_AT = datetime(2024, 5, 1, 9, 0, 0)


@pytest.fixture
def template():
    return {
        "title": "Team Survey",
        "description": "Quarterly check-in",
        "fields": [
            {"id": "name", "type": "text", "label": "Name", "required": True, "placeholder": "Jane"},
            {"id": "sep", "type": "separator", "label": "Details"},
            {"id": "langs", "type": "checkbox", "label": "Languages", "options": ["Python", "Go"]},
            {"id": "team", "type": "table", "label": "Team", "columns": ["Name", "Email"]},
        ],
    }


@pytest.fixture
def responses():
    return [
        {
            "id": "r2",
            "submittedAt": "2024-04-02T10:00:00",
            "responses": {"name": "Bob", "langs": ["Go"]},
        },
        {
            "id": "r1",
            "submittedAt": "2024-04-01T08:30:00",
            "responses": {
                "name": "Ann | Bob\nline2",
                "langs": ["Python", "Go"],
                "team": [{"Name": "A", "Email": "a@x"}, {"Name": "B", "Email": "b@x"}],
            },
        },
    ]


# -- cell formatting ---------------------------------------------------------


class TestCellFormatting:
    def test_scalars(self):
        assert format_cell_value("text") == "text"
        assert format_cell_value(3) == "3"
        assert format_cell_value(True) == "true"
        assert format_cell_value(None) == ""

    def test_list_of_scalars(self):
        assert format_cell_value(["a", "b"]) == "a, b"
        assert format_cell_value([]) == ""

    def test_table_rows(self):
        rows = [{"Name": "A", "Email": "a@x"}, {"Name": "B", "Email": "b@x"}]
        assert format_cell_value(rows) == "A | a@x; B | b@x"

    def test_object(self):
        assert format_cell_value({"k": 1}) == '{"k":1}'

    def test_escape(self):
        assert escape_table_cell("a|b\r\nc\nd ") == "a\\|b c d"


# -- table assembly ----------------------------------------------------------


class TestResponseTable:
    def test_columns_follow_template_then_unknown_ids(self, template, responses):
        responses[0]["responses"]["legacy"] = "old"
        frame = build_response_table(template, responses)

        assert list(frame.columns) == [SUBMITTED_AT_COLUMN, "Name", "Languages", "Team", "legacy"]
        assert len(frame) == 2

    def test_cells_are_formatted(self, template, responses):
        frame = build_response_table(template, responses)

        assert frame.loc[0, SUBMITTED_AT_COLUMN] == "2024-04-02 10:00:00"
        assert frame.loc[1, "Team"] == "A | a@x; B | b@x"
        assert frame.loc[0, "Team"] == ""

    def test_csv(self, template, responses):
        csv = export_responses_to_csv(template, responses)
        lines = csv.splitlines()

        assert lines[0] == "Submitted At,Name,Languages,Team"
        assert lines[1] == "2024-04-02 10:00:00,Bob,Go,"


# -- markdown report ---------------------------------------------------------


class TestMarkdownReport:
    def test_header(self, template, responses):
        md = export_responses_to_markdown(template, responses, exported_at=EXPORTED_AT)

        assert md.startswith("# Form Responses: Team Survey\n\nQuarterly check-in\n\n")
        assert "**Exported at:** 2024-05-01 09:00:00" in md
        assert "**Total responses:** 2" in md
        assert md.endswith("\n")

    def test_table_rows_escaped(self, template, responses):
        md = export_responses_to_markdown(template, responses, exported_at=EXPORTED_AT)

        assert "## Responses (2)" in md
        assert "| Submitted At | Name | Languages | Team |" in md
        assert "| --- | --- | --- | --- |" in md
        assert "| 2024-04-02 10:00:00 | Bob | Go | - |" in md
        assert "| 2024-04-01 08:30:00 | Ann \\| Bob line2 | Python, Go | A \\| a@x; B \\| b@x |" in md

    def test_summary_is_chronological(self, template, responses):
        md = export_responses_to_markdown(template, responses, exported_at=EXPORTED_AT)

        assert "- **First response:** 2024-04-01 08:30:00" in md
        assert "- **Last response:** 2024-04-02 10:00:00" in md

    def test_form_definition(self, template, responses):
        md = export_responses_to_markdown(template, responses, exported_at=EXPORTED_AT)

        assert "## Form Definition" in md
        assert "### Name" in md
        assert "**Type:** `text` *(required)*" in md
        assert '**Placeholder:** "Jane"' in md
        assert "<!-- Details -->\n---" in md
        assert "**Options:** Python, Go" in md
        assert "**Columns:** Name, Email" in md

    def test_definition_can_be_skipped(self, template, responses):
        md = export_responses_to_markdown(template, responses, include_form_definition=False)
        assert "## Form Definition" not in md

    def test_definition_default_from_config(self, template, responses):
        config = FormMarkConfig(include_form_definition=False)
        md = export_responses_to_markdown(template, responses, config=config)
        assert "## Form Definition" not in md

    def test_no_responses(self, template):
        md = export_responses_to_markdown(template, [], exported_at=EXPORTED_AT)

        assert "**Total responses:** 0" in md
        assert md.endswith("## Responses\n\nNo responses.\n")
        assert "## Summary" not in md

    def test_custom_empty_cell_and_format(self, template, responses):
        config = FormMarkConfig(empty_cell="n/a", datetime_format="%d.%m.%Y")
        md = export_responses_to_markdown(template, responses, config=config, exported_at=EXPORTED_AT)

        assert "**Exported at:** 01.05.2024" in md
        assert "| 02.04.2024 | Bob | Go | n/a |" in md


# -- escaping ----------------------------------------------------------------


class TestEscaping:
    def test_backslash_escaped_before_pipe(self):
        assert escape_table_cell("x\\|y") == "x\\\\\\|y"
        assert escape_table_cell("C:\\temp") == "C:\\\\temp"

    def test_preescaped_pipe_keeps_row_width(self):
        template = {
            "title": "T",
            "fields": [
                {"id": "a", "type": "text", "label": "A"},
                {"id": "b", "type": "text", "label": "B"},
            ],
        }
        responses = [{"id": "r", "submittedAt": "2024-01-01T00:00:00", "responses": {"a": "x\\|y", "b": "z"}}]

        md = export_responses_to_markdown(template, responses, include_form_definition=False)

        assert "| 2024-01-01 00:00:00 | x\\\\\\|y | z |" in md

    def test_separator_comments_cannot_close_early(self):
        template = {
            "title": "T",
            "fields": [{"id": "s", "type": "separator", "label": "a --> b", "helpText": "c-->d"}],
        }
        md = export_responses_to_markdown(template, [], exported_at=EXPORTED_AT)

        assert "<!-- a -- > b -->\n<!-- c-- >d -->\n---" in md
