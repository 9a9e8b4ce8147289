"""Login: credenciales, tipos de resultado y resultado exitoso."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class LoginOutcomeKind(str, Enum):
    """Clasificación de un intento de login."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_BLOCKED = "account_blocked"
    MASTER_PASSWORD_REQUIRED = "master_password_required"
    MASTER_NOT_ALLOWED = "master_not_allowed"
    OTP_REQUIRED = "otp_required"
    CAPTCHA_REQUIRED = "captcha_required"
    USER_NOT_FOUND = "user_not_found"
    TOO_FAST = "too_fast"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LoginOutcome:
    """Resultado transitorio de clasificar una respuesta de login.

    `wait_seconds` solo aplica a `TOO_FAST`; `payload` solo a `UNKNOWN`.
    """

    kind: LoginOutcomeKind
    wait_seconds: int | None = None
    payload: str = ""
    auth_key: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is LoginOutcomeKind.SUCCESS


class LoginCredentials(BaseModel):
    """Credenciales de login.

    Con `personal_email` y `personal_password` se usa el login "master"
    (suplantación con credenciales personales).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    email: str = Field(..., description="Login de la cuenta.")
    password: str = Field(..., description="Contraseña de la cuenta.")
    personal_email: str = Field(default="", description="Email personal (login master).")
    personal_password: str = Field(default="", description="Contraseña personal (login master).")
    one_time_password: str = Field(default="", alias="oneTimePassword")
    captcha: str = Field(default="", alias="grecaptchaResponse")

    @property
    def is_master(self) -> bool:
        return bool(self.personal_email and self.personal_password)

    def to_request(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
