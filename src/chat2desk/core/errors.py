"""Taxonomía de errores del cliente.

Tres familias:
- Errores de decodificación/transporte propios (`InvalidResponseError`,
  `InvalidTokenError`).
- Errores de validación del proveedor (`VendorError` y subclases), derivados
  del campo `status` y del texto libre de `errors`.
- Errores de login (`LoginError` y subclases), producidos por el negociador
  de autenticación.

Los errores de red (DNS, conexión, TLS, timeout) son excepciones de `httpx`
y se propagan tal cual.
"""

from __future__ import annotations

from typing import Any


class Chat2DeskError(Exception):
    """Base de todos los errores del cliente."""


class InvalidResponseError(Chat2DeskError):
    """El cuerpo no se pudo decodificar o el status no es el esperado.

    `body` conserva los bytes crudos para diagnóstico.
    """

    def __init__(self, message: str = "invalid response", *, body: bytes | None = None) -> None:
        super().__init__(message)
        self.body = body


class InvalidTokenError(Chat2DeskError):
    def __init__(self, message: str = "invalid token") -> None:
        super().__init__(message)


class VendorError(Chat2DeskError):
    """Error de validación devuelto por el proveedor (`status != success`)."""

    default_message = "vendor error"

    def __init__(self, message: str | None = None, *, errors: Any = None) -> None:
        super().__init__(message or self.default_message)
        self.errors = errors


class InvalidIDError(VendorError):
    default_message = "invalid ID"


class InvalidParametersError(VendorError):
    default_message = "invalid parameters"


class UnknownError(VendorError):
    default_message = "unknown error"


class DialogClosedError(VendorError):
    default_message = "dialog is closed"


class InvalidRequestIDError(VendorError):
    default_message = "invalid request ID"


class InvalidClientIDError(VendorError):
    default_message = "invalid client ID"


class InvalidTagIDError(VendorError):
    default_message = "invalid tag ID"


class InvalidOperatorGroupIDError(VendorError):
    default_message = "invalid operator group ID"


class InvalidOperatorIDError(VendorError):
    default_message = "invalid operator ID"


class InvalidMessageIDError(VendorError):
    default_message = "invalid message ID"


class InvalidChannelIDError(VendorError):
    default_message = "invalid channel ID"


class InvalidTransportError(VendorError):
    default_message = "invalid transport"


class WebhookUrlAlreadyUsedError(VendorError):
    default_message = "webhook URL is already used"


class ClientAlreadyExistsError(VendorError):
    """El cliente ya existe; `client` trae el registro existente si vino."""

    default_message = "client already exists"

    def __init__(self, message: str | None = None, *, errors: Any = None, client: Any = None) -> None:
        super().__init__(message, errors=errors)
        self.client = client


class LoginError(Chat2DeskError):
    """Base de los resultados fallidos de login."""

    default_message = "login failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidLoginOrPasswordError(LoginError):
    default_message = "invalid login or password"


class TooFastError(LoginError):
    """Demasiados intentos; `wait_seconds` indica cuánto esperar (si se conoce)."""

    default_message = "too fast"

    def __init__(self, message: str | None = None, *, wait_seconds: int | None = None) -> None:
        super().__init__(message)
        self.wait_seconds = wait_seconds


class AccountBlockedError(LoginError):
    default_message = "account is blocked"


class MasterPasswordRequiredError(LoginError):
    default_message = "master password required"


class MasterNotAllowedError(LoginError):
    default_message = "master not allowed"


class OTPRequiredError(LoginError):
    default_message = "otp required"


class CaptchaRequiredError(LoginError):
    default_message = "captcha required"


class UserNotFoundError(LoginError):
    default_message = "user not found"


class UnknownLoginError(LoginError):
    """Ninguna regla reconoció la respuesta; `payload` es el bloque `errors` serializado."""

    default_message = "unknown error"

    def __init__(self, message: str | None = None, *, payload: str = "") -> None:
        super().__init__(message)
        self.payload = payload
