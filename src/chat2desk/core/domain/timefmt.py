"""Codec de fechas/horas del proveedor.

La API mezcla formatos según el endpoint y la versión:
- ISO-8601 con o sin zona ("2024-03-01T10:20:30", "2024-03-01T10:20:30 UTC").
- "YYYY-MM-DD HH:MM:SS".
- Epoch en segundos (int/float o string numérica).
- Vacío / null para "sin valor".

`VendorDateTime` es el tipo anotado que usan los modelos.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any

from dateutil import parser as dtparser
from pydantic import BeforeValidator, PlainSerializer

VENDOR_DATE_FORMAT = "%Y-%m-%d"


def parse_vendor_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not a date/time value: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if not text or text.startswith("0000-00-00"):
            return None
        if text.isdigit():
            return datetime.fromtimestamp(int(text), tz=timezone.utc)
        try:
            parsed = dtparser.parse(text)
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"unrecognized date/time: {value!r}") from exc
        return parsed
    raise ValueError(f"not a date/time value: {value!r}")


def format_vendor_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def format_vendor_date(value: date) -> str:
    """Formato de fecha que esperan los parámetros de query (`date=`)."""

    return value.strftime(VENDOR_DATE_FORMAT)


VendorDateTime = Annotated[
    datetime | None,
    BeforeValidator(parse_vendor_datetime),
    PlainSerializer(format_vendor_datetime, return_type=str | None),
]
