"""Utility helpers for formmark."""

from .ids import IdGenerator, generate_field_id, make_id_generator, sequential_ids
from .logger import configure_logging, get_logger

__all__ = [
    "IdGenerator",
    "generate_field_id",
    "make_id_generator",
    "sequential_ids",
    "configure_logging",
    "get_logger",
]
