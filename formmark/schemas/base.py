"""Base schema types for formmark."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FieldType(str, Enum):
    """The closed palette of form field types."""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    FILE = "file"
    TABLE = "table"
    SEPARATOR = "separator"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls._value2member_map_


TEXT_LIKE_TYPES = frozenset({FieldType.TEXT, FieldType.TEXTAREA, FieldType.EMAIL, FieldType.NUMBER})
CHOICE_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})

# Wire names of every property the configuration line can carry.
KNOWN_PROPERTIES = ("placeholder", "options", "acceptedFileTypes", "maxFileSize", "multiple", "columns")


class BaseFormSchema(BaseModel):
    """Base for all formmark models.

    Attribute names are snake_case in Python and camelCase on the wire
    (``help_text`` <-> ``helpText``); either spelling is accepted on input.
    Instances are frozen value objects.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    def to_dict(self) -> dict:
        """Dump with camelCase keys, dropping unset optional values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
