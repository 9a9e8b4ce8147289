"""Recursos de la API.

Un módulo por recurso; cada clase recibe el `ApiTransport` compartido.
"""

from chat2desk.adapters.resources.base import Resource
from chat2desk.adapters.resources.channels import ChannelsResource
from chat2desk.adapters.resources.clients import ClientsResource
from chat2desk.adapters.resources.companies import CompaniesResource
from chat2desk.adapters.resources.custom_client_fields import CustomClientFieldsResource
from chat2desk.adapters.resources.dialogs import DialogsResource
from chat2desk.adapters.resources.messages import MessagesResource
from chat2desk.adapters.resources.operator_groups import OperatorGroupsResource
from chat2desk.adapters.resources.operators import OperatorsResource
from chat2desk.adapters.resources.statistics import StatisticsResource
from chat2desk.adapters.resources.tags import TagsResource
from chat2desk.adapters.resources.webhooks import WebhooksResource

__all__ = [
    "ChannelsResource",
    "ClientsResource",
    "CompaniesResource",
    "CustomClientFieldsResource",
    "DialogsResource",
    "MessagesResource",
    "OperatorGroupsResource",
    "OperatorsResource",
    "Resource",
    "StatisticsResource",
    "TagsResource",
    "WebhooksResource",
]
