"""Configuración del cliente.

Qué contiene:
- `ClientSettings`: URL base, token y timeout. Modelo Pydantic inmutable;
  solo contiene lo que el llamador pasa, nunca lee el entorno.
- `EnvClientSettings`: lector de `CHAT2DESK_*` / `.env` (pydantic-settings)
  que produce un `ClientSettings`. Lo usan `Chat2DeskClient.from_env` y los
  scripts/tests.
- La URL base se normaliza siempre con `/` final para poder concatenar
  rutas relativas (`v1/clients`) sin dobles barras.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEOUT_SECONDS = 10.0


def normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        raise ValueError("base_url is empty")
    if not url.endswith("/"):
        url += "/"
    return url


class ClientSettings(BaseModel):
    """Configuración inmutable de una instancia de cliente.

    Se fija una vez al construir el cliente y se comparte (solo lectura) entre
    todas las peticiones.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    base_url: str = Field(
        ...,
        min_length=1,
        description="URL base de la API (p.ej. 'https://api.chat2desk.com/').",
    )
    token: str = Field(
        default="",
        description="Token de la API. Vacío => peticiones sin cabecera Authorization.",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout por request (segundos).",
    )

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        return normalize_base_url(value)

    def url_for(self, path: str) -> str:
        """Devuelve la URL absoluta para una ruta relativa a `base_url`."""

        return self.base_url + path.lstrip("/")


class EnvClientSettings(BaseSettings):
    """`CHAT2DESK_BASE_URL`, `CHAT2DESK_TOKEN`, `CHAT2DESK_TIMEOUT_SECONDS` (entorno o `.env`)."""

    model_config = SettingsConfigDict(
        env_prefix="CHAT2DESK_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(..., min_length=1)
    token: str = ""
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    def to_client_settings(self) -> ClientSettings:
        return ClientSettings(base_url=self.base_url, token=self.token, timeout_seconds=self.timeout_seconds)
