"""
Unified configuration for formmark.

Collects the defaults the parser, exporter and response reporter fall
back on (separator label, synthetic table columns, timestamp format)
into one dataclass with validation.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..utils.logger import configure_logging
from .exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FormMarkConfig:
    """
    Configuration shared by the markdown parser, exporter and reporter.

    Instances are immutable so one config can be handed to concurrent
    callers without copying.
    """

    # === Grammar ===
    default_separator_label: str = "Separator"
    """Label given to separators produced by a bare ``---`` line"""

    default_table_columns: tuple[str, ...] = ("Column 1", "Column 2")
    """Columns written for table fields that have none, so reimport succeeds"""

    id_prefix: str = "field"
    """Prefix of generated field ids (``<prefix>_<ms>_<random>``)"""

    # === Response reports ===
    datetime_format: str = "%Y-%m-%d %H:%M:%S"
    """strftime format for submission and export timestamps"""

    empty_cell: str = "-"
    """Placeholder rendered for missing or empty response values"""

    include_form_definition: bool = True
    """Whether response reports inline the form definition by default"""

    # === Logging Configuration ===
    log_level: str = "WARNING"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"""

    def __post_init__(self):
        """Validate configuration values after initialization."""
        if not self.default_separator_label.strip():
            raise ConfigurationError("default_separator_label must not be empty")

        columns = tuple(self.default_table_columns)
        if not columns:
            raise ConfigurationError("default_table_columns must contain at least one column")
        if any(not str(c).strip() for c in columns):
            raise ConfigurationError(f"default_table_columns must not contain blank names, got {columns}")
        object.__setattr__(self, "default_table_columns", tuple(str(c) for c in columns))

        if not self.id_prefix or not self.id_prefix.strip():
            raise ConfigurationError("id_prefix must not be empty")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            )
        object.__setattr__(self, "log_level", self.log_level.upper())

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def apply_logging(self) -> logging.Logger:
        """Set the ``formmark`` logger to ``log_level`` and attach its handler."""
        return configure_logging(self.log_level)

    @classmethod
    def from_env(cls, prefix: str = "FORMMARK_", dotenv_path: Optional[str] = None) -> FormMarkConfig:
        """Build a config from environment variables (``.env`` is loaded first).

        Recognised variables (with the default prefix)::

            FORMMARK_DEFAULT_SEPARATOR_LABEL
            FORMMARK_DEFAULT_TABLE_COLUMNS   comma-separated
            FORMMARK_ID_PREFIX
            FORMMARK_DATETIME_FORMAT
            FORMMARK_EMPTY_CELL
            FORMMARK_INCLUDE_FORM_DEFINITION true/false
            FORMMARK_LOG_LEVEL

        Unset variables keep the dataclass defaults.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        kwargs: dict = {}

        def _get(name: str) -> Optional[str]:
            value = os.getenv(f"{prefix}{name}")
            return value if value not in (None, "") else None

        for name, attr in (
            ("DEFAULT_SEPARATOR_LABEL", "default_separator_label"),
            ("ID_PREFIX", "id_prefix"),
            ("DATETIME_FORMAT", "datetime_format"),
            ("EMPTY_CELL", "empty_cell"),
            ("LOG_LEVEL", "log_level"),
        ):
            value = _get(name)
            if value is not None:
                kwargs[attr] = value

        columns = _get("DEFAULT_TABLE_COLUMNS")
        if columns is not None:
            kwargs["default_table_columns"] = tuple(c.strip() for c in columns.split(",") if c.strip())

        include = _get("INCLUDE_FORM_DEFINITION")
        if include is not None:
            lowered = include.strip().lower()
            if lowered not in ("true", "false", "1", "0", "yes", "no"):
                raise ConfigurationError(
                    f"{prefix}INCLUDE_FORM_DEFINITION must be a boolean, got {include!r}"
                )
            kwargs["include_form_definition"] = lowered in ("true", "1", "yes")

        return cls(**kwargs)

    @classmethod
    def for_development(cls) -> FormMarkConfig:
        """Create configuration optimized for development."""
        return cls(
            id_prefix="dev_field",
            log_level="DEBUG",  # See every section failure
        )

    @classmethod
    def for_production(cls) -> FormMarkConfig:
        """Create configuration optimized for production."""
        return cls(
            log_level="WARNING",
        )
