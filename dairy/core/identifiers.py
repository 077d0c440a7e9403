"""Record identifiers: 32 character lowercase hex strings."""
from __future__ import annotations

import re
from uuid import uuid4

from .errors import InvalidIdentifierError

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid4().hex


def parse_identifier(value: object) -> str:
    """Return ``value`` normalised to lowercase, or raise ``InvalidIdentifierError``."""

    if not isinstance(value, str):
        raise InvalidIdentifierError(value)
    candidate = value.strip().lower()
    if not _ID_PATTERN.match(candidate):
        raise InvalidIdentifierError(value)
    return candidate
