from fastapi import APIRouter, Depends, status

from app.features.sms.schemas.sms import SendSMSRequest
from app.features.sms.services.credential_service import CredentialService, get_credential_service
from app.features.sms.services.sms_sender import SMSSender, get_sms_sender
from app.platform.response import api_response, error_response

router = APIRouter(prefix="/api/sms", tags=["SMS"])


@router.post("/send")
async def send_sms(
    request: SendSMSRequest,
    credential_service: CredentialService = Depends(get_credential_service),
    sender: SMSSender = Depends(get_sms_sender),
):
    """Send a manual SMS. The provider outcome is returned as-is."""
    credentials = await credential_service.get_credentials()
    if not credentials:
        return error_response(
            "Twilio credentials not available from ChittyConnect",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    result = await sender.send(credentials, request.to, request.message)
    return api_response(data=result.to_payload())
