import httpx
from fastapi import Depends

from app.features.sms.schemas.sms import ProviderCredentials, SendResult
from app.platform.config import settings
from app.platform.http import get_http_client
from app.platform.logger import get_logger

logger = get_logger(__name__)


class SMSSender:
    """Sends SMS through the Twilio Messages API."""

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    async def send(self, credentials: ProviderCredentials, to: str, body: str) -> SendResult:
        """
        Send one message. Never raises; failures come back as
        SendResult(success=False, error=...).
        """
        url = (
            f"{settings.TWILIO_API_BASE.rstrip('/')}"
            f"/Accounts/{credentials.account_sid}/Messages.json"
        )
        form = {
            "To": to,
            "From": credentials.phone_number,
            "Body": body,
        }

        try:
            response = await self.http_client.post(
                url,
                data=form,
                auth=(credentials.account_sid, credentials.auth_token),
            )
        except httpx.HTTPError as e:
            logger.error(f"Twilio request failed: {e}")
            return SendResult(success=False, error=str(e) or e.__class__.__name__)

        if not response.is_success:
            error = response.text
            logger.error(f"Twilio error: {error}")
            return SendResult(success=False, error=error)

        try:
            message_sid = response.json().get("sid")
        except (ValueError, AttributeError) as e:
            logger.error(f"Twilio accepted the message but the response was unreadable: {e}")
            return SendResult(success=False, error="Malformed Twilio response")

        if not isinstance(message_sid, str) or not message_sid:
            logger.error(f"Twilio accepted the message but returned no usable sid: {message_sid!r}")
            return SendResult(success=False, error="Malformed Twilio response")

        logger.info(f"SMS sent to {to}: {message_sid}")
        return SendResult(success=True, message_sid=message_sid)


def get_sms_sender(http_client: httpx.AsyncClient = Depends(get_http_client)) -> SMSSender:
    return SMSSender(http_client)
