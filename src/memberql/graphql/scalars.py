"""
Custom GraphQL scalars
"""

import re
import uuid
from typing import NewType

import strawberry

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid(value: object) -> bool:
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


def parse_uuid(value: object) -> uuid.UUID:
    """Parse an incoming argument or variable into a `uuid.UUID`.

    Only the canonical hyphenated form is accepted.
    """
    if not is_uuid(value):
        raise TypeError(f"Invalid uuid: {value!r}")
    return uuid.UUID(str(value))


def serialize_uuid(value: object) -> str:
    if isinstance(value, uuid.UUID):
        return str(value)
    if is_uuid(value):
        return str(value).lower()
    raise TypeError(f"Invalid uuid: {value!r}")


UUID = NewType("UUID", uuid.UUID)

# Registered against `UUID` through the schema config scalar map
UUIDScalar = strawberry.scalar(
    name="UUID",
    description="Canonical 8-4-4-4-12 hexadecimal UUID string",
    serialize=serialize_uuid,
    parse_value=parse_uuid,
)
