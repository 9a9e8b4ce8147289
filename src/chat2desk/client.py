"""Fachada pública: un `Chat2DeskClient` con un atributo por recurso.

Uso:
    settings = ClientSettings(base_url="https://api.chat2desk.com", token="...")
    client = Chat2DeskClient(settings)
    info = await client.companies.api_info()

Qué hace:
- Comparte un único `ApiTransport` (settings, logger, cliente httpx) entre
  todos los recursos y el login.
- Si se le inyecta un `httpx.AsyncClient`, quien lo creó lo cierra.
"""

from __future__ import annotations

import httpx

from chat2desk.adapters.auth import AuthNegotiator
from chat2desk.adapters.http_client import ApiTransport
from chat2desk.adapters.resources import (
    ChannelsResource,
    ClientsResource,
    CompaniesResource,
    CustomClientFieldsResource,
    DialogsResource,
    MessagesResource,
    OperatorGroupsResource,
    OperatorsResource,
    StatisticsResource,
    TagsResource,
    WebhooksResource,
)
from chat2desk.core.config import ClientSettings, EnvClientSettings
from chat2desk.core.domain.login import LoginCredentials, LoginOutcome
from chat2desk.core.interfaces.logger import LoggerLike


class Chat2DeskClient:
    def __init__(
        self,
        settings: ClientSettings,
        *,
        logger: LoggerLike | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.transport = ApiTransport(settings, logger=logger, transport=transport, http_client=http_client)
        self.auth = AuthNegotiator(self.transport)
        self.channels = ChannelsResource(self.transport)
        self.clients = ClientsResource(self.transport)
        self.companies = CompaniesResource(self.transport)
        self.custom_client_fields = CustomClientFieldsResource(self.transport)
        self.dialogs = DialogsResource(self.transport)
        self.messages = MessagesResource(self.transport)
        self.operator_groups = OperatorGroupsResource(self.transport)
        self.operators = OperatorsResource(self.transport)
        self.statistics = StatisticsResource(self.transport)
        self.tags = TagsResource(self.transport)
        self.webhooks = WebhooksResource(self.transport)

    @classmethod
    def from_env(cls, **kwargs) -> Chat2DeskClient:
        """Construye el cliente leyendo `CHAT2DESK_*` del entorno / `.env`."""

        return cls(EnvClientSettings().to_client_settings(), **kwargs)

    @property
    def settings(self) -> ClientSettings:
        return self.transport.settings

    async def login(self, credentials: LoginCredentials) -> LoginOutcome:
        return await self.auth.sign_in(credentials)
