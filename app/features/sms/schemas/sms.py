from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InboundSMS(BaseModel):
    """Fields read from the provider's form-encoded webhook."""

    from_number: str = ""
    to_number: str = ""
    body: str = ""
    message_sid: str = ""


class ProviderCredentials(BaseModel):
    """Messaging provider credentials as served by ChittyConnect."""

    model_config = ConfigDict(populate_by_name=True)

    account_sid: str = Field(..., alias="accountSid")
    auth_token: str = Field(..., alias="authToken")
    phone_number: str = Field(..., alias="phoneNumber")

    @field_validator("account_sid", "auth_token", "phone_number", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # Phone numbers are sometimes stored as bare digits
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SendSMSRequest(BaseModel):
    to: str = Field(..., min_length=1)
    message: str


class SendResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message_sid: Optional[str] = Field(default=None, alias="messageSid")
    error: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
