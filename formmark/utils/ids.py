"""Field id generators.

The parser takes an ``id_generator`` callable so callers (and tests) can
choose how fresh ids are minted.  Any zero-argument callable returning a
unique string works.
"""

from __future__ import annotations

import itertools
import secrets
import string
import time
from typing import Callable

IdGenerator = Callable[[], str]

_BASE36 = string.digits + string.ascii_lowercase


def _random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_field_id(prefix: str = "field") -> str:
    """Timestamp plus random suffix, e.g. ``field_1718000000000_k3j9x0a2b``."""
    return f"{prefix}_{int(time.time() * 1000)}_{_random_suffix()}"


def make_id_generator(prefix: str = "field") -> IdGenerator:
    """Bind ``prefix`` into a zero-argument generator."""

    def _generate() -> str:
        return generate_field_id(prefix)

    return _generate


def sequential_ids(prefix: str = "field") -> IdGenerator:
    """Deterministic generator yielding ``<prefix>_1``, ``<prefix>_2``, ..."""
    counter = itertools.count(1)

    def _generate() -> str:
        return f"{prefix}_{next(counter)}"

    return _generate
