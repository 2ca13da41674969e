"""Form template and collected-response models consumed by the response reporter."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .base import BaseFormSchema
from .fields import FormField


class FormTemplate(BaseFormSchema):
    """A form definition: title, optional description and ordered fields."""

    title: str
    description: Optional[str] = None
    fields: list[FormField] = Field(default_factory=list)


class FormResponse(BaseFormSchema):
    """One submitted response.

    Attributes:
        id: Response identifier.
        responses: Field id -> submitted value (strings, lists, table rows...).
        submitted_at: Submission time; ISO-8601 strings are accepted.
    """

    id: str
    responses: dict[str, Any] = Field(default_factory=dict)
    submitted_at: datetime
