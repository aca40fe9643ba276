"""Cursor encoding and decoding for pagination.

A cursor is the URL-safe base64 encoding of a compact JSON object holding
the sort key values of one row:

    {"v": {"id": 42}, "d": "forward"}

Clients treat cursors as opaque strings and pass them back unchanged as
``after``/``before``.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError


class CursorData(BaseModel):
    """Decoded cursor payload.

    Attributes:
        values: Sort field name to value for the addressed row
        direction: Direction the cursor was created for
    """

    values: dict[str, Any] = Field(description="Sort field values for seeking")
    direction: Literal["forward", "backward"] = Field(default="forward")

    model_config = {"frozen": True}


class CursorCodec:
    """Encode and decode pagination cursors."""

    @staticmethod
    def encode(data: CursorData) -> str:
        """Encode cursor data to an opaque string."""
        serialized = {
            "v": CursorCodec._serialize_values(data.values),
            "d": data.direction,
        }
        json_str = json.dumps(serialized, separators=(",", ":"))
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    @staticmethod
    def decode(cursor: str) -> CursorData:
        """Decode a cursor string.

        Raises:
            ValueError: If the cursor is not valid base64 JSON of the expected shape.
        """
        try:
            json_str = base64.urlsafe_b64decode(cursor.encode()).decode()
            payload = json.loads(json_str)
            if not isinstance(payload, dict) or not isinstance(payload.get("v"), dict):
                msg = "payload is not a cursor object"
                raise ValueError(msg)
            return CursorData(values=payload["v"], direction=payload.get("d", "forward"))
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"Invalid cursor: {e}") from e

    @staticmethod
    def _serialize_values(values: dict[str, Any]) -> dict[str, Any]:
        result = {}
        for key, value in values.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, UUID):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    @staticmethod
    def create_cursor(
        row: Any,
        sort_fields: list[str],
        direction: Literal["forward", "backward"] = "forward",
    ) -> str:
        """Create a cursor from the sort field values of a row.

        Example:
            cursor = CursorCodec.create_cursor(message, sort_fields=["id"])
        """
        values = {field: getattr(row, field, None) for field in sort_fields}
        return CursorCodec.encode(CursorData(values=values, direction=direction))


__all__ = ["CursorCodec", "CursorData"]
