"""
Hiring Notifier Backend — Shared Model Helpers
===============================================

What:  Base model, timestamp type, id generator and email check shared by the
       Application and Team entities.
How:   Pydantic v2 alias generator maps snake_case attributes to the camelCase
       field names used on the wire and in the JSON collections.

Timestamp format:
    Persisted and returned as `YYYY-MM-DDTHH:MM:SS` (local time, whole seconds).
    Incoming values with a timezone offset or fractional seconds are
    normalized to that shape when loaded.
"""

import re
import uuid
import time
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _normalize_timestamp(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.replace(microsecond=0)


Timestamp = Annotated[
    datetime,
    AfterValidator(_normalize_timestamp),
    PlainSerializer(lambda v: v.strftime(TIMESTAMP_FORMAT), return_type=str),
]


def now_timestamp() -> datetime:
    """Current local time truncated to the second."""
    return datetime.now().replace(microsecond=0)


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits)) or "0"


def generate_id() -> str:
    """
    Time-based prefix + random suffix.

    Example: "m2k9x0q1a3f9c2e7" is base-36 epoch milliseconds followed by
    8 hex characters from a UUID4.
    """
    return _to_base36(int(time.time() * 1000)) + uuid.uuid4().hex[:8]


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_PATTERN.fullmatch(value) is not None


class CamelModel(BaseModel):
    """Base for entities and API schemas: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """JSON-ready dict with camelCase keys, as stored in a collection."""
        return self.model_dump(mode="json", by_alias=True)
