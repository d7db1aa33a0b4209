from typing import Any, Iterator, Optional

from pydantic import AliasChoices, BaseModel, Field

BUSINESS_ACCOUNT_OBJECT = "whatsapp_business_account"
MESSAGES_FIELD = "messages"


class WhatsAppText(BaseModel):
    body: Optional[str] = None


class WhatsAppMessage(BaseModel):
    id: Optional[str] = None
    from_phone: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("from", "from_phone"),
    )
    timestamp: Optional[str] = None
    type: Optional[str] = "text"
    text: Optional[WhatsAppText] = None

    @property
    def body(self) -> str:
        if self.text and self.text.body:
            return self.text.body
        return ""


class WhatsAppStatus(BaseModel):
    id: Optional[str] = None
    status: Optional[str] = None  # sent, delivered, read, failed
    recipient_id: Optional[str] = None
    timestamp: Optional[str] = None
    errors: Optional[list[dict[str, Any]]] = None


class WhatsAppMetadata(BaseModel):
    display_phone_number: Optional[str] = None
    phone_number_id: Optional[str] = None


class WhatsAppValue(BaseModel):
    # Items are validated one at a time by the webhook router.
    messaging_product: Optional[str] = None
    metadata: Optional[WhatsAppMetadata] = None
    messages: list[dict[str, Any]] = Field(default_factory=list)
    statuses: list[dict[str, Any]] = Field(default_factory=list)


class WhatsAppChange(BaseModel):
    field: Optional[str] = None
    value: WhatsAppValue = Field(default_factory=WhatsAppValue)


class WhatsAppEntry(BaseModel):
    id: Optional[str] = None
    changes: list[WhatsAppChange] = Field(default_factory=list)


class WhatsAppWebhookPayload(BaseModel):
    object: Optional[str] = None
    entry: list[WhatsAppEntry] = Field(default_factory=list)

    @property
    def is_business_account(self) -> bool:
        return self.object == BUSINESS_ACCOUNT_OBJECT

    def _message_changes(self) -> Iterator[WhatsAppValue]:
        for entry in self.entry:
            for change in entry.changes:
                if change.field == MESSAGES_FIELD:
                    yield change.value

    def raw_messages(self) -> Iterator[dict[str, Any]]:
        for value in self._message_changes():
            yield from value.messages

    def raw_statuses(self) -> Iterator[dict[str, Any]]:
        for value in self._message_changes():
            yield from value.statuses
