from fastapi import APIRouter

from app.platform.config import settings
from app.platform.response import api_response

router = APIRouter()

CAPABILITIES = [
    "sms_webhook",
    "ai_categorization",
    "lead_management",
    "auto_response",
]

ENDPOINTS = {
    "health": "/health",
    "status": "/api/v1/status",
    "webhook": "/webhook/sms",
    "leads": "/api/leads",
    "send": "/api/sms/send",
}


@router.get("/health", tags=["health"])
async def health_check():
    return api_response(
        data={
            "status": "healthy",
            "service": settings.SERVICE_NAME,
            "canonicalUri": settings.CANONICAL_URI,
            "version": settings.VERSION,
            "credentialSource": "chittyconnect",
        }
    )


@router.get("/api/v1/status", tags=["health"])
async def service_status():
    return api_response(
        data={
            "service": settings.SERVICE_NAME,
            "canonicalUri": settings.CANONICAL_URI,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "tier": 4,
            "capabilities": CAPABILITIES,
            "dependencies": {
                "chittyconnect": "chittycanon://platform/services/connect",
                "llm": settings.LLM_MODEL,
            },
            "endpoints": ENDPOINTS,
        }
    )
