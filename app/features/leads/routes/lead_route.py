from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.leads.schemas.lead_schema import LeadListResponse, LeadOut, LeadStatusUpdate
from app.features.leads.services.lead_service import LeadService
from app.platform.db.session import get_db
from app.platform.logger import get_logger
from app.platform.response import api_response, error_response

logger = get_logger(__name__)

router = APIRouter(prefix="/api/leads", tags=["Leads"])


@router.get("")
async def list_leads(db: AsyncSession = Depends(get_db)):
    """The 100 most recent leads, newest first."""
    service = LeadService(db)
    try:
        leads = await service.list_recent()
    except Exception as e:
        logger.error(f"Error fetching leads: {e}")
        return error_response("Failed to fetch leads", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return api_response(
        data=LeadListResponse(leads=[LeadOut.model_validate(lead) for lead in leads]),
    )


@router.patch("/{lead_id}")
async def update_lead_status(
    lead_id: str,
    payload: LeadStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = LeadService(db)
    try:
        await service.update_status(lead_id, payload.status)
    except Exception as e:
        logger.error(f"Error updating lead {lead_id}: {e}")
        return error_response("Failed to update lead", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return api_response(data={"success": True})
