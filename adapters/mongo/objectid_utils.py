"""
Utilities for MongoDB ObjectId conversion.
"""

from typing import Optional, Union

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: Union[str, ObjectId, None]) -> Optional[ObjectId]:
    """
    Convert a string id to ObjectId.

    Returns None for None or for strings that are not valid ObjectIds, so
    callers can treat malformed ids as "no such document".

    Examples:
        >>> parse_object_id("507f1f77bcf86cd799439011")
        ObjectId('507f1f77bcf86cd799439011')
        >>> parse_object_id("invalid") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def objectid_to_str(value: Union[ObjectId, str, None]) -> Optional[str]:
    """Convert a stored id (ObjectId or already a string) to its string form."""
    if value is None:
        return None
    return str(value)
