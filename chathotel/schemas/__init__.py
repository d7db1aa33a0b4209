from chathotel.schemas.diagnostics import (
    GuestDetailResponse,
    GuestSessionSchema,
    ManualMessageRequest,
    ManualMessageResponse,
    StatusResponse,
    TurnSchema,
)
from chathotel.schemas.whatsapp import WhatsAppMessage, WhatsAppStatus, WhatsAppWebhookPayload

__all__ = [
    "GuestDetailResponse",
    "GuestSessionSchema",
    "ManualMessageRequest",
    "ManualMessageResponse",
    "StatusResponse",
    "TurnSchema",
    "WhatsAppMessage",
    "WhatsAppStatus",
    "WhatsAppWebhookPayload",
]
