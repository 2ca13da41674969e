"""Reference material for the markdown form grammar: one example per field type plus authoring rules."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..schemas.base import FieldType

EXAMPLES: dict[FieldType, str] = {
    FieldType.TEXT: (
        "## Full Name\n"
        '[text] (required) {"placeholder": "Enter your full name"}\n'
        "Please give your first and last name"
    ),
    FieldType.TEXTAREA: (
        "## Message\n"
        '[textarea] {"placeholder": "Type your message here"}\n'
        "Tell us about your enquiry"
    ),
    FieldType.EMAIL: (
        "## Email Address\n"
        '[email] (required) {"placeholder": "you@example.com"}\n'
        "We will use this address to contact you"
    ),
    FieldType.NUMBER: (
        "## Age\n"
        '[number] {"placeholder": "25"}\n'
        "Your age in years"
    ),
    FieldType.DATE: (
        "## Date of Birth\n"
        "[date] (required)\n"
        "Pick your date of birth"
    ),
    FieldType.SELECT: (
        "## Country\n"
        '[select] (required) {"options": ["Poland", "Germany", "United Kingdom", "France"]}\n'
        "Choose your country"
    ),
    FieldType.RADIO: (
        "## Preferred Contact Method\n"
        '[radio] {"options": ["Email", "Phone", "SMS"]}\n'
        "How would you like us to contact you?"
    ),
    FieldType.CHECKBOX: (
        "## Interests\n"
        '[checkbox] {"options": ["Technology", "Sport", "Music", "Travel", "Food"]}\n'
        "Tick everything that applies"
    ),
    FieldType.FILE: (
        "## CV Upload\n"
        '[file] (required) {"acceptedFileTypes": [".pdf", ".doc", ".docx"], "maxFileSize": 5, "multiple": false}\n'
        "Upload your CV (PDF or Word)"
    ),
    FieldType.TABLE: (
        "## Participants\n"
        '[table] (required) {"columns": ["First Name", "Last Name", "Email", "Phone"]}\n'
        "Add every participant"
    ),
    FieldType.SEPARATOR: (
        "## Section\n"
        "[separator]\n"
        "This text is shown above the divider"
    ),
}

OVERVIEW = (
    "The markdown form syntax describes fields in a simple, readable way. "
    "Each field consists of a ## header, a type in square brackets, optional "
    "JSON properties and optional help text."
)

RULES = [
    "Every field must start with a ## header holding the field name",
    "The field type goes in square brackets: [type]",
    "Add (required) after the type to make the field required",
    'Define properties as strict JSON: {"key": "value"}',
    "Put help text on the lines after the field definition",
    "Allowed types: " + ", ".join(FieldType.values()),
    'select, radio and checkbox fields need an "options" array',
    'table fields need a non-empty "columns" array',
    "A horizontal rule (---) becomes a separator field",
]

TIPS = [
    "Use descriptive field names",
    "Add help text to explain what a field is for",
    "Preview your markdown before importing it",
    "Keep naming consistent across the whole form",
    "Run an export/import fidelity check to confirm nothing is lost",
]


@dataclass(frozen=True)
class SyntaxDocumentation:
    overview: str
    examples: dict[FieldType, str]
    rules: list[str] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)


def generate_examples() -> dict[FieldType, str]:
    """One valid markdown example per field type."""
    return dict(EXAMPLES)


def get_syntax_documentation() -> SyntaxDocumentation:
    return SyntaxDocumentation(
        overview=OVERVIEW,
        examples=generate_examples(),
        rules=list(RULES),
        tips=list(TIPS),
    )
