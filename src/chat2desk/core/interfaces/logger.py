"""Contrato del sumidero de logs.

`logging.Logger` y `logging.LoggerAdapter` lo cumplen tal cual; cualquier
otro objeto con estos métodos (p.ej. un logger estructurado) también.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LoggerLike(Protocol):
    """Logger con métodos por nivel, estilo `logging` (mensaje + args)."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None: ...