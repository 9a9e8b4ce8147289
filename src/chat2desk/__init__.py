"""Cliente asíncrono para la API REST de Chat2Desk."""

import logging

from chat2desk.client import Chat2DeskClient
from chat2desk.core.config import ClientSettings
from chat2desk.core.domain.login import LoginCredentials, LoginOutcome, LoginOutcomeKind
from chat2desk.core.errors import (
    Chat2DeskError,
    InvalidResponseError,
    InvalidTokenError,
    LoginError,
    VendorError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Chat2DeskClient",
    "Chat2DeskError",
    "ClientSettings",
    "InvalidResponseError",
    "InvalidTokenError",
    "LoginCredentials",
    "LoginError",
    "LoginOutcome",
    "LoginOutcomeKind",
    "VendorError",
]
