"""Modelos del dominio (Pydantic v2).

Qué hay aquí:
- Entidades planas que reflejan un recurso del proveedor (cliente, diálogo,
  mensaje, tag, webhook, operador, canal, valoración).
- Envoltorios de respuesta (`status`/`message`/`errors` + `data` y `meta`).
- Payloads de escritura con su normalización previa al envío.

Nota:
- Todos ignoran campos desconocidos: el proveedor añade campos sin avisar.
- Las respuestas de error suelen traer `data` vacío con otro tipo (`[]`
  donde se espera un objeto); se normaliza a `None`/`[]` para que la
  clasificación del error no acabe en un fallo de decodificación.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, field_validator, model_validator
from pydantic.config import ConfigDict

from chat2desk.core.domain.timefmt import VendorDateTime


def _empty_to_none(value: Any) -> Any:
    if value is None or value == "" or value == [] or value == {}:
        return None
    return value


def _empty_to_list(value: Any) -> Any:
    if value is None or value == "" or value == {}:
        return []
    return value


def _lenient_int(value: Any) -> Any:
    if value is None or value == "":
        return None
    return value


def _number_as_text(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _webhook_errors(value: Any) -> Any:
    if not isinstance(value, dict):
        return {}
    return value


class _VendorModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Meta(_VendorModel):
    """Metadatos de paginación de los listados."""

    total: int = 0
    limit: int = 0
    offset: int = 0


def _meta(value: Any) -> Any:
    if not isinstance(value, dict):
        return {}
    return value


MetaField = Annotated[Meta, BeforeValidator(_meta)]

# "ok" lo usa algún endpoint como éxito.
SUCCESS_STATUSES = frozenset({"success", "ok"})


class ApiEnvelope(_VendorModel):
    """Campos comunes de toda respuesta: `status`, `message`, `errors`.

    En una respuesta de error un `data` que no encaja (objeto parcial) se
    descarta en vez de fallar: los errores tipados salen de `errors`.
    """

    status: str = ""
    message: Any = None
    errors: Any = None

    @model_validator(mode="wrap")
    @classmethod
    def _drop_bad_data_on_error(cls, value: Any, handler: Any) -> Any:
        try:
            return handler(value)
        except ValidationError:
            if not isinstance(value, dict) or "data" not in value:
                raise
            if str(value.get("status") or "").strip().lower() in SUCCESS_STATUSES:
                raise
            return handler({key: item for key, item in value.items() if key != "data"})


class Channel(_VendorModel):
    id: int = Field(..., description="Identificador del canal.")
    name: str | None = None
    phone: str | None = None
    transports: list[str] = Field(default_factory=list)


class Tag(_VendorModel):
    id: int = Field(..., description="Identificador del tag.")
    group_id: int | None = None
    group_name: str | None = None
    label: str = ""
    description: str | None = None


class Client(_VendorModel):
    """Cliente final (contacto) del proveedor.

    Embebe sus canales y tags tal como vienen en la respuesta; no se
    resuelven relaciones del lado del cliente.
    """

    id: int = Field(..., description="Identificador del cliente.")
    name: str | None = None
    username: str | None = None
    comment: str | None = None
    assigned_name: str | None = Field(default=None, description="Nombre asignado por el operador.")
    phone: str | None = None
    client_phone: str | None = None
    avatar: str | None = None
    region_id: Annotated[int | None, BeforeValidator(_lenient_int)] = None
    country_id: Annotated[int | None, BeforeValidator(_lenient_int)] = None
    first_client_message: str | None = None
    last_client_message: str | None = None
    extra_comment_1: str | None = None
    extra_comment_2: str | None = None
    extra_comment_3: str | None = None
    custom_fields: Annotated[dict[str, Any] | None, BeforeValidator(_empty_to_none)] = None
    client_external_id: str | None = None
    external_id: Annotated[int | None, BeforeValidator(_lenient_int)] = None
    external_ids: Annotated[dict[str, Any] | None, BeforeValidator(_empty_to_none)] = None
    channels: Annotated[list[Channel], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    tags: Annotated[list[Tag], BeforeValidator(_empty_to_list)] = Field(default_factory=list)


class CustomClientField(_VendorModel):
    id: int
    name: str = ""
    type: str | None = None
    value: str | None = None
    editable: bool = False
    viewable: bool = False
    tracking_field: bool = False


class CompanyInfo(_VendorModel):
    company_id: int = Field(..., alias="companyID")
    partner_id: int | None = Field(default=None, alias="partnerID")
    company_name: str | None = None
    admin_email: str | None = None


class Message(_VendorModel):
    """Mensaje tal como lo devuelve el envío (o `last_message` de un diálogo)."""

    message_id: int | None = None
    channel_id: int | None = None
    operator_id: int | None = None
    transport: str | None = None
    type: str | None = None
    client_id: int | None = None
    dialog_id: int | None = None
    request_id: int | None = None


class Dialog(_VendorModel):
    id: int = Field(..., description="Identificador del diálogo.")
    state: str | None = Field(default=None, description="'open' o 'closed'.")
    begin: VendorDateTime = None
    end: VendorDateTime = None
    last_message: Annotated[Message | None, BeforeValidator(_empty_to_none)] = None
    last_request_id: int | None = None
    messages: Annotated[int | None, BeforeValidator(_lenient_int)] = Field(
        default=None,
        description="Número de mensajes (el proveedor lo manda como número o string).",
    )
    operator_id: int | None = None


class Operator(_VendorModel):
    id: int
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    role: str | None = None
    status_id: int | None = None
    opened_dialogs: int | None = None
    online: int | None = None


class OperatorGroup(_VendorModel):
    id: int
    name: str = ""
    operator_ids: Annotated[list[int], BeforeValidator(_empty_to_list)] = Field(default_factory=list)


class StatisticRating(_VendorModel):
    """Una valoración del informe `rating`."""

    score_value: Annotated[str | None, BeforeValidator(_number_as_text)] = None
    rating_scale_score: int | None = None
    valuation_request_id: int | None = None

    def score(self) -> int:
        """Puntuación entera, o -1 si el proveedor no mandó un número."""

        try:
            return int(str(self.score_value).strip())
        except (TypeError, ValueError):
            return -1

    def range_bucket(self, limit1: int, limit2: int) -> int:
        """Clasifica la puntuación: 0 sin valor, 1 (<= limit1), 2 (<= limit2), 3 (resto)."""

        value = self.score()
        if value == -1:
            return 0
        if value <= limit1:
            return 1
        if value <= limit2:
            return 2
        return 3


class WebhookErrorEntry(_VendorModel):
    text: str = ""
    created_at: int | None = None


class Webhook(_VendorModel):
    id: int
    name: str = ""
    url: str = ""
    events: Annotated[list[str], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    status: str = ""
    errors: Annotated[list[WebhookErrorEntry], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    source: str | None = None
    channels: Annotated[list[int], BeforeValidator(_empty_to_list)] = Field(default_factory=list)


WEBHOOK_STATUSES = ("enable", "disable")


class WebhookPayload(_VendorModel):
    """Payload de alta/modificación de un webhook.

    `status` se pasa a minúsculas y solo admite 'enable' o 'disable'; cualquier
    otro valor se convierte en 'enable'.
    """

    name: str
    url: str
    events: list[str] = Field(default_factory=list)
    channels: list[int] = Field(default_factory=list)
    status: str = "enable"
    order: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> str:
        status = str(value or "").strip().lower()
        if status not in WEBHOOK_STATUSES:
            return WEBHOOK_STATUSES[0]
        return status

    def to_request(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        if not data.get("order"):
            data.pop("order", None)
        return data


MESSAGE_TYPES = ("to_client", "autoreply", "system", "comment")


class MessageButton(_VendorModel):
    type: str | None = Field(default=None, description="'reply', 'location', 'phone', 'email', 'url'.")
    text: str | None = None
    color: str | None = Field(default=None, description="Solo chat online.")
    url: str | None = None


class MessageButtons(_VendorModel):
    buttons: list[MessageButton] = Field(default_factory=list)


class MessagePayload(_VendorModel):
    """Mensaje a enviar. `type` se restringe a `MESSAGE_TYPES` (por defecto 'to_client')."""

    text: str
    attachment: str | None = None
    attachment_filename: str | None = None
    type: str = "to_client"
    client_id: int | None = None
    channel_id: int | None = None
    operator_id: int | None = None
    transport: str | None = None
    external_id: str | None = None
    reply_message_id: int | None = None
    inline_buttons: list[MessageButton] | None = None
    keyboard: MessageButtons | None = None
    interactive: str | None = Field(default=None, description="Solo wa_dialog ('list'/'button').")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> str:
        kind = str(value or "").strip().lower()
        if kind not in MESSAGE_TYPES:
            return MESSAGE_TYPES[0]
        return kind

    def to_request(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


DIALOG_STATES = ("open", "closed")
SORT_ORDERS = ("asc", "desc")


class DialogsQuery(_VendorModel):
    """Filtros del listado de diálogos; solo se envían los no-default y válidos."""

    limit: int = 0
    offset: int = 0
    state: str = ""
    operator_id: int = 0
    order: str = ""

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.limit > 0:
            params["limit"] = self.limit
        if self.offset > 0:
            params["offset"] = self.offset
        if self.state in DIALOG_STATES:
            params["state"] = self.state
        if self.operator_id > 0:
            params["operator_id"] = self.operator_id
        if self.order in SORT_ORDERS:
            params["order"] = self.order
        return params


# Envoltorios de respuesta -----------------------------------------------------


class ChannelsResponse(ApiEnvelope):
    data: Annotated[list[Channel], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    meta: MetaField = Field(default_factory=Meta)


class ClientResponse(ApiEnvelope):
    data: Annotated[Client | None, BeforeValidator(_empty_to_none)] = None


class ClientsResponse(ApiEnvelope):
    data: Annotated[list[Client], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    meta: MetaField = Field(default_factory=Meta)


class CompanyInfoResponse(ApiEnvelope):
    data: Annotated[CompanyInfo | None, BeforeValidator(_empty_to_none)] = None


class CustomClientFieldsResponse(ApiEnvelope):
    data: Annotated[list[CustomClientField], BeforeValidator(_empty_to_list)] = Field(default_factory=list)


class DialogResponse(ApiEnvelope):
    data: Annotated[Dialog | None, BeforeValidator(_empty_to_none)] = None


class DialogsResponse(ApiEnvelope):
    data: Annotated[list[Dialog], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    meta: MetaField = Field(default_factory=Meta)


class MessageResponse(ApiEnvelope):
    data: Annotated[Message | None, BeforeValidator(_empty_to_none)] = None


class OperatorsResponse(ApiEnvelope):
    data: Annotated[list[Operator], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    meta: MetaField = Field(default_factory=Meta)


class OperatorGroupsResponse(ApiEnvelope):
    data: Annotated[list[OperatorGroup], BeforeValidator(_empty_to_list)] = Field(default_factory=list)


class StatisticRatingsResponse(ApiEnvelope):
    data: Annotated[list[StatisticRating], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    meta: MetaField = Field(default_factory=Meta)


class TagResponse(ApiEnvelope):
    data: Annotated[Tag | None, BeforeValidator(_empty_to_none)] = None


class TagsResponse(ApiEnvelope):
    data: Annotated[list[Tag], BeforeValidator(_empty_to_list)] = Field(default_factory=list)
    meta: MetaField = Field(default_factory=Meta)


class WebhooksResponse(ApiEnvelope):
    data: Annotated[list[Webhook], BeforeValidator(_empty_to_list)] = Field(default_factory=list)


class WebhookFieldErrors(_VendorModel):
    url: list[str] = Field(default_factory=list)
    order: list[str] = Field(default_factory=list)
    events: list[str] = Field(default_factory=list)


class WebhookResponse(ApiEnvelope):
    """Respuesta de alta/modificación: `errors` viene agrupado por campo."""

    data: Annotated[Webhook | None, BeforeValidator(_empty_to_none)] = None
    errors: Annotated[WebhookFieldErrors, BeforeValidator(_webhook_errors)] = Field(
        default_factory=WebhookFieldErrors
    )

    def error_summary(self) -> str:
        """Une las listas de error no vacías: 'URL: a, b; Order: c; Events: d'."""

        parts: list[str] = []
        if self.errors.url:
            parts.append(f"URL: {', '.join(self.errors.url)}")
        if self.errors.order:
            parts.append(f"Order: {', '.join(self.errors.order)}")
        if self.errors.events:
            parts.append(f"Events: {', '.join(self.errors.events)}")
        return "; ".join(parts)
