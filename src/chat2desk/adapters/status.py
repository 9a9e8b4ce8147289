"""Centinela de estado y clasificación de errores del proveedor.

- `is_success`: única regla de éxito (`status == "success"`). "ok" se acepta
  pero se registra como anomalía.
- `errors_text`: texto en minúsculas del bloque `errors` (string, lista o
  dict) para buscar subcadenas.
- `classify_relation_error`: mapea palabras clave ("group", "message", ...)
  a su error tipado de ID inválido.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from chat2desk.core.domain.models import ApiEnvelope
from chat2desk.core.errors import (
    InvalidClientIDError,
    InvalidMessageIDError,
    InvalidOperatorGroupIDError,
    InvalidOperatorIDError,
    InvalidParametersError,
    InvalidRequestIDError,
    InvalidTagIDError,
    VendorError,
)
from chat2desk.core.interfaces.logger import LoggerLike

SUCCESS_STATUS = "success"
ANOMALOUS_SUCCESS_STATUSES = frozenset({"ok"})

# Orden relevante: "operator group" debe ganar a "operator".
RELATION_KEYWORDS: tuple[tuple[str, type[VendorError]], ...] = (
    ("group", InvalidOperatorGroupIDError),
    ("operator", InvalidOperatorIDError),
    ("message", InvalidMessageIDError),
    ("request", InvalidRequestIDError),
    ("client", InvalidClientIDError),
    ("tag", InvalidTagIDError),
)


def is_success(envelope: ApiEnvelope, *, logger: LoggerLike, action: str) -> bool:
    status = (envelope.status or "").strip().lower()
    if status == SUCCESS_STATUS:
        return True
    if status in ANOMALOUS_SUCCESS_STATUSES:
        logger.warning("Unexpected status sentinel %r while trying to %s", envelope.status, action)
        return True
    return False


def errors_text(*parts: Any) -> str:
    chunks: list[str] = []
    for part in parts:
        if part is None or part == "":
            continue
        if isinstance(part, bytes):
            chunks.append(part.decode("utf-8", errors="replace"))
        elif isinstance(part, str):
            chunks.append(part)
        else:
            chunks.append(json.dumps(part, ensure_ascii=False))
    return " ".join(chunks).lower()


def classify_relation_error(
    text: str,
    *,
    keywords: Iterable[str] | None = None,
    errors: Any = None,
    default: type[VendorError] = InvalidParametersError,
) -> VendorError:
    """Primer error cuyo keyword aparece en `text` (restringido a `keywords` si se da)."""

    allowed = set(keywords) if keywords is not None else None
    for keyword, error_cls in RELATION_KEYWORDS:
        if allowed is not None and keyword not in allowed:
            continue
        if keyword in text:
            return error_cls(errors=errors)
    return default(errors=errors)
