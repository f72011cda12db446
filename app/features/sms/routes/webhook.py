from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.leads.services.categorizer import CategorizerService, get_categorizer
from app.features.leads.services.lead_service import LeadService
from app.features.sms.schemas.sms import InboundSMS
from app.features.sms.services.credential_service import CredentialService, get_credential_service
from app.features.sms.services.sms_sender import SMSSender, get_sms_sender
from app.platform.db.session import get_db
from app.platform.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhook", tags=["Webhooks"])

# Empty TwiML: replies go out through the Messages API instead
EMPTY_TWIML = '<?xml version="1.0" encoding="UTF-8"?><Response></Response>'


def _form_text(form, field: str) -> str:
    value = form.get(field)
    return value if isinstance(value, str) else ""


async def read_inbound_sms(request: Request) -> InboundSMS:
    form = await request.form()
    return InboundSMS(
        from_number=_form_text(form, "From"),
        to_number=_form_text(form, "To"),
        body=_form_text(form, "Body"),
        message_sid=_form_text(form, "MessageSid"),
    )


@router.post("/sms")
async def inbound_sms(
    request: Request,
    db: AsyncSession = Depends(get_db),
    categorizer: CategorizerService = Depends(get_categorizer),
    credential_service: CredentialService = Depends(get_credential_service),
    sender: SMSSender = Depends(get_sms_sender),
):
    """
    Twilio inbound SMS webhook.
    - Categorizes the message (LLM, falling back to keyword rules)
    - Stores it as a lead
    - Sends the suggested response when credentials are available
    Always acknowledges with 200 and empty TwiML so Twilio does not redeliver,
    including when the form body itself cannot be parsed.
    """
    webhook = InboundSMS()
    try:
        webhook = await read_inbound_sms(request)
        logger.info(f"Incoming SMS from {webhook.from_number}: {webhook.body}")

        categorization = await categorizer.categorize(webhook.body, webhook.from_number)
        await LeadService(db).store_lead(webhook, categorization)

        credentials = await credential_service.get_credentials()
        if credentials:
            await sender.send(credentials, webhook.from_number, categorization.suggested_response)
        else:
            logger.warning("Twilio credentials not available, skipping auto-response")
    except Exception:
        logger.exception(f"Unexpected error while handling message {webhook.message_sid or '<no sid>'}")

    return Response(content=EMPTY_TWIML, status_code=200, media_type="text/xml")
