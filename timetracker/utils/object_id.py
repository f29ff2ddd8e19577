"""ObjectId helpers."""
from typing import Optional

from bson import ObjectId


def parse_object_id(value: str) -> Optional[ObjectId]:
    """
    Parse a client-supplied identifier.

    Returns None for anything that is not a valid ObjectId, so callers can
    treat malformed and unknown identifiers the same way.

    Examples:
        >>> parse_object_id("65a1f0c2e4b0a1b2c3d4e5f6")
        ObjectId('65a1f0c2e4b0a1b2c3d4e5f6')
        >>> parse_object_id("42") is None
        True
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)
