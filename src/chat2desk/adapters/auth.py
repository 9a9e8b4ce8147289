"""Negociador de autenticación (login / login master).

La API ha cambiado el formato de sus errores de login al menos tres veces y
una instalación concreta puede hablar cualquiera de ellos. La respuesta se
clasifica con una cadena ordenada de clasificadores; cada uno devuelve un
`LoginOutcome` definitivo o `None` ("no es mío") y se prueba el siguiente:

1. `status == success`.
2. Formato nuevo: `errors.error` con códigos simbólicos.
3. Formato antiguo sin `login_attempts_info` => usuario inexistente.
4. Texto libre sobre el cuerpo en minúsculas.
5. Formato muy antiguo: `errors` como dict campo -> lista de mensajes.

Si nadie clasifica, el resultado es `UNKNOWN` con el bloque `errors`
serializado.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable

from chat2desk.adapters.http_client import ApiTransport
from chat2desk.core.domain.login import LoginCredentials, LoginOutcome, LoginOutcomeKind
from chat2desk.core.errors import (
    AccountBlockedError,
    CaptchaRequiredError,
    InvalidLoginOrPasswordError,
    InvalidResponseError,
    LoginError,
    MasterNotAllowedError,
    MasterPasswordRequiredError,
    OTPRequiredError,
    TooFastError,
    UnknownLoginError,
    UserNotFoundError,
)

SIGN_IN_PATH = "api/user/sign_in?lang=en"
MASTER_SIGN_IN_PATH = "api/user/master_sign_in?lang=en"

# Pista de espera fija del formato nuevo para el código "timeout".
SYMBOLIC_TIMEOUT_WAIT_SECONDS = 10

RATE_LIMIT_PHRASE = "please, try again after"

SYMBOLIC_CODES: tuple[tuple[str, LoginOutcomeKind], ...] = (
    ("user_does_not_exist", LoginOutcomeKind.USER_NOT_FOUND),
    ("incorrect_otp", LoginOutcomeKind.OTP_REQUIRED),
    ("captcha", LoginOutcomeKind.CAPTCHA_REQUIRED),
    ("incorrect_password", LoginOutcomeKind.INVALID_CREDENTIALS),
    ("timeout", LoginOutcomeKind.TOO_FAST),
)

FREE_TEXT_PHRASES: tuple[tuple[str, LoginOutcomeKind], ...] = (
    ("wrong login or password", LoginOutcomeKind.INVALID_CREDENTIALS),
    ("this account is blocked", LoginOutcomeKind.ACCOUNT_BLOCKED),
    ('"master_login":[true]', LoginOutcomeKind.MASTER_PASSWORD_REQUIRED),
    ("login with master-password is not permitted using this method", LoginOutcomeKind.MASTER_PASSWORD_REQUIRED),
    (
        "access under master password is not allowed by the account administrator",
        LoginOutcomeKind.MASTER_NOT_ALLOWED,
    ),
    ("enter one time password", LoginOutcomeKind.OTP_REQUIRED),
    ("please, enter captcha to log in", LoginOutcomeKind.CAPTCHA_REQUIRED),
    ("user_does_not_exist", LoginOutcomeKind.USER_NOT_FOUND),
    ("e-mail is not a valid email address", LoginOutcomeKind.USER_NOT_FOUND),
)

FIELD_PHRASES: dict[str, tuple[tuple[str, LoginOutcomeKind], ...]] = {
    "password": (
        ("wrong login or password", LoginOutcomeKind.INVALID_CREDENTIALS),
        ("this account is blocked", LoginOutcomeKind.ACCOUNT_BLOCKED),
        ("login with master-password is not permitted using this method", LoginOutcomeKind.MASTER_PASSWORD_REQUIRED),
        (
            "access under master password is not allowed by the account administrator",
            LoginOutcomeKind.MASTER_NOT_ALLOWED,
        ),
    ),
    "brute_force": (
        ("please, enter captcha to log in", LoginOutcomeKind.CAPTCHA_REQUIRED),
    ),
    "one_time_password": (
        ("must be filled", LoginOutcomeKind.OTP_REQUIRED),
    ),
}

_ERRORS_BY_KIND: dict[LoginOutcomeKind, type[LoginError]] = {
    LoginOutcomeKind.INVALID_CREDENTIALS: InvalidLoginOrPasswordError,
    LoginOutcomeKind.ACCOUNT_BLOCKED: AccountBlockedError,
    LoginOutcomeKind.MASTER_PASSWORD_REQUIRED: MasterPasswordRequiredError,
    LoginOutcomeKind.MASTER_NOT_ALLOWED: MasterNotAllowedError,
    LoginOutcomeKind.OTP_REQUIRED: OTPRequiredError,
    LoginOutcomeKind.CAPTCHA_REQUIRED: CaptchaRequiredError,
    LoginOutcomeKind.USER_NOT_FOUND: UserNotFoundError,
}


@dataclass(frozen=True)
class LoginResponse:
    """Respuesta de login ya leída: documento JSON + texto en minúsculas."""

    document: dict[str, Any]
    text: str

    @property
    def errors(self) -> Any:
        return self.document.get("errors")


LoginClassifier = Callable[[LoginResponse], LoginOutcome | None]


def parse_login_response(body: bytes) -> LoginResponse:
    try:
        document = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidResponseError(body=body) from exc
    if not isinstance(document, dict):
        raise InvalidResponseError(body=body)
    return LoginResponse(document=document, text=body.decode("utf-8", errors="replace").lower())


def extract_wait_seconds(text: str) -> int | None:
    """Segundos entre "after" y "second" en "...try again after N seconds"."""

    anchor = text.find(RATE_LIMIT_PHRASE)
    if anchor == -1:
        return None
    start = anchor + len(RATE_LIMIT_PHRASE)
    end = text.find("second", start)
    if end == -1:
        return None
    fragment = text[start:end].strip()
    if not fragment.isdigit():
        return None
    return int(fragment)


def _too_fast(text: str) -> LoginOutcome | None:
    if RATE_LIMIT_PHRASE not in text:
        return None
    return LoginOutcome(LoginOutcomeKind.TOO_FAST, wait_seconds=extract_wait_seconds(text))


def classify_success(response: LoginResponse) -> LoginOutcome | None:
    status = str(response.document.get("status") or "").lower()
    if status != "success":
        return None
    auth_key = response.document.get("auth_key")
    return LoginOutcome(LoginOutcomeKind.SUCCESS, auth_key=str(auth_key) if auth_key else None)


def classify_symbolic_codes(response: LoginResponse) -> LoginOutcome | None:
    errors = response.errors
    if not isinstance(errors, dict):
        return None
    codes = errors.get("error")
    if not isinstance(codes, list):
        return None

    for code, kind in SYMBOLIC_CODES:
        if code not in codes:
            continue
        if kind is LoginOutcomeKind.TOO_FAST:
            return LoginOutcome(kind, wait_seconds=SYMBOLIC_TIMEOUT_WAIT_SECONDS)
        return LoginOutcome(kind)
    return None


def classify_missing_attempts(response: LoginResponse) -> LoginOutcome | None:
    # Versiones antiguas omiten el campo para usuarios desconocidos.
    if response.document.get("login_attempts_info") is None:
        return LoginOutcome(LoginOutcomeKind.USER_NOT_FOUND)
    return None


def classify_free_text(response: LoginResponse) -> LoginOutcome | None:
    for phrase, kind in FREE_TEXT_PHRASES:
        if phrase in response.text:
            return LoginOutcome(kind)
    return _too_fast(response.text)


def classify_field_errors(response: LoginResponse) -> LoginOutcome | None:
    errors = response.errors
    if not isinstance(errors, dict):
        return None

    for field, messages in errors.items():
        if field not in FIELD_PHRASES or not isinstance(messages, list):
            continue
        for message in messages:
            text = str(message).lower()
            if field == "brute_force":
                outcome = _too_fast(text)
                if outcome is not None:
                    return outcome
            for phrase, kind in FIELD_PHRASES[field]:
                if phrase in text:
                    return LoginOutcome(kind)
    return None


LOGIN_CLASSIFIERS: tuple[LoginClassifier, ...] = (
    classify_success,
    classify_symbolic_codes,
    classify_missing_attempts,
    classify_free_text,
    classify_field_errors,
)


def classify_login_response(body: bytes) -> LoginOutcome:
    """Clasifica una respuesta de login probando `LOGIN_CLASSIFIERS` en orden.

    Raises:
        InvalidResponseError: el cuerpo no es un objeto JSON.
    """

    response = parse_login_response(body)
    for classifier in LOGIN_CLASSIFIERS:
        outcome = classifier(response)
        if outcome is not None:
            return outcome
    return LoginOutcome(
        LoginOutcomeKind.UNKNOWN,
        payload=json.dumps(response.errors, ensure_ascii=False),
    )


def login_error_for(outcome: LoginOutcome) -> LoginError:
    if outcome.kind is LoginOutcomeKind.TOO_FAST:
        return TooFastError(wait_seconds=outcome.wait_seconds)
    error_cls = _ERRORS_BY_KIND.get(outcome.kind)
    if error_cls is not None:
        return error_cls()
    return UnknownLoginError(payload=outcome.payload)


class AuthNegotiator:
    """Hace el POST de login y clasifica el resultado."""

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def attempt(self, credentials: LoginCredentials) -> LoginOutcome:
        """Intenta el login y devuelve la clasificación sin lanzar por resultado."""

        path = MASTER_SIGN_IN_PATH if credentials.is_master else SIGN_IN_PATH
        try:
            result = await self._transport.post(path, credentials.to_request())
        except Exception as exc:
            self._transport.logger.error("Failed login: %s", exc)
            raise

        return classify_login_response(result.body)

    async def sign_in(self, credentials: LoginCredentials) -> LoginOutcome:
        """Como `attempt`, pero cualquier resultado no exitoso se lanza como `LoginError`."""

        outcome = await self.attempt(credentials)
        if outcome.ok:
            return outcome
        self._transport.logger.info("Login rejected: %s", outcome.kind.value)
        raise login_error_for(outcome)
