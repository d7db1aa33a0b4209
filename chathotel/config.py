from dataclasses import dataclass
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class HotelProfile:
    """Static facts about the property, used in prompts and canned replies."""

    name: str
    phone: str
    location: str
    check_in: str
    check_out: str


class Settings(BaseSettings):
    app_name: str = "ChatHotel"
    debug: bool = False
    log_level: str = "INFO"
    cors_allow_origins: str = "*"

    # WhatsApp Business Cloud API
    whatsapp_access_token: Optional[str] = None
    whatsapp_phone_number_id: Optional[str] = None
    whatsapp_business_account_id: Optional[str] = None
    whatsapp_webhook_verify_token: str = "chathotel_verify_token"
    whatsapp_api_base_url: str = "https://graph.facebook.com"
    whatsapp_api_version: str = "v19.0"
    whatsapp_timeout_seconds: float = 30.0

    # Language model
    openai_api_key: Optional[str] = None
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500
    llm_timeout_seconds: float = 15.0

    # Conversation tracking
    history_limit: int = 20
    context_turns: int = 3

    # Hotel facts
    hotel_name: str = "Darbar Heritage Farmstay"
    hotel_phone: str = "+91-9910364826"
    hotel_location: str = "a serene countryside setting surrounded by our own organic farm"
    hotel_check_in: str = "2:00 PM"
    hotel_check_out: str = "11:00 AM"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("llm_temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError(f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {value}")
        return value

    @field_validator("history_limit", "context_turns", "llm_max_tokens")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"must be >= 1, got {value}")
        return value

    @field_validator("llm_timeout_seconds", "whatsapp_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"timeout must be > 0, got {value}")
        return value

    @property
    def whatsapp_configured(self) -> bool:
        return bool(self.whatsapp_access_token and self.whatsapp_phone_number_id)

    @property
    def llm_configured(self) -> bool:
        return bool(self.openai_api_key)

    def cors_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]
        return origins or ["*"]

    def hotel_profile(self) -> HotelProfile:
        return HotelProfile(
            name=self.hotel_name,
            phone=self.hotel_phone,
            location=self.hotel_location,
            check_in=self.hotel_check_in,
            check_out=self.hotel_check_out,
        )
