"""Contratos (Protocol) que consume el cliente.

- `LoggerLike`: sumidero de logs inyectable.
- `PageFetcher`: función que devuelve una página de un listado.
"""

from chat2desk.core.interfaces.logger import LoggerLike
from chat2desk.core.interfaces.pages import Page, PageFetcher

__all__ = [
    "LoggerLike",
    "Page",
    "PageFetcher",
]
