"""Serialization utilities for caching.

Provides JSON serialization for Pydantic models and other
complex types used in cache values.
"""

import json
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel


class CacheEncoder(json.JSONEncoder):
    """Custom JSON encoder for cache values.

    Handles:
    - Pydantic models (stored as their JSON dump)
    - Datetimes and dates
    """

    def default(self, obj: Any) -> Any:
        """Encode special types to JSON-serializable format.

        Args:
            obj: Object to encode

        Returns:
            JSON-serializable representation
        """
        if isinstance(obj, BaseModel):
            return {"__pydantic__": True, "data": obj.model_dump(mode="json")}
        if isinstance(obj, datetime):
            return {"__datetime__": True, "value": obj.isoformat()}
        if isinstance(obj, date):
            return {"__date__": True, "value": obj.isoformat()}
        return super().default(obj)


def serialize(value: Any) -> str:
    """Serialize a value for caching.

    Args:
        value: Value to serialize

    Returns:
        JSON string representation
    """
    return json.dumps(value, cls=CacheEncoder)


def deserialize(data: str) -> Any:
    """Deserialize a cached value.

    Args:
        data: JSON string from cache

    Returns:
        Deserialized Python object

    Note:
        Pydantic models come back as dicts. The caller
        should reconstruct the model if needed.
    """
    return json.loads(data, object_hook=_decode_hook)


def _decode_hook(obj: dict[str, Any]) -> Any:
    """JSON decode hook for special types.

    Args:
        obj: Decoded JSON dict

    Returns:
        Reconstructed Python object
    """
    if "__datetime__" in obj:
        return datetime.fromisoformat(obj["value"])
    if "__date__" in obj:
        return date.fromisoformat(obj["value"])
    if "__pydantic__" in obj:
        return obj["data"]
    return obj
