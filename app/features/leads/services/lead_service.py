from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.leads.models.lead_model import LEAD_STATUS_NEW, Lead
from app.features.leads.schemas.lead_schema import CategorizationResult
from app.features.sms.schemas.sms import InboundSMS
from app.platform.logger import get_logger

logger = get_logger(__name__)

RECENT_LEADS_LIMIT = 100


class LeadService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def store_lead(
        self, webhook: InboundSMS, categorization: CategorizationResult
    ) -> Optional[Lead]:
        """
        Persist one categorized inbound message. Best effort: failures are
        logged and None is returned so the webhook acknowledgment is never blocked.
        """
        lead = Lead(
            phone=webhook.from_number,
            to_number=webhook.to_number,
            message=webhook.body,
            message_sid=webhook.message_sid,
            category=categorization.category,
            urgency=categorization.urgency,
            suggested_response=categorization.suggested_response,
            status=LEAD_STATUS_NEW,
        )
        try:
            self.db.add(lead)
            await self.db.commit()
            await self.db.refresh(lead)
        except Exception:
            logger.exception(f"Failed to store lead for message {webhook.message_sid or '<no sid>'}")
            await self._safe_rollback()
            return None

        logger.info(f"Stored lead {lead.id} ({lead.category.value}, urgency {lead.urgency})")
        return lead

    async def list_recent(self, limit: int = RECENT_LEADS_LIMIT) -> List[Lead]:
        result = await self.db.execute(
            select(Lead).order_by(Lead.created_at.desc(), Lead.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def update_status(self, lead_id: str, status: str) -> None:
        """Set a lead's status and stamp updated_at. Unknown ids are a no-op."""
        await self.db.execute(
            update(Lead)
            .where(Lead.id == lead_id)
            .values(status=status, updated_at=func.now())
        )
        await self.db.commit()

    async def _safe_rollback(self) -> None:
        try:
            await self.db.rollback()
        except Exception as e:
            logger.error(f"Rollback after failed lead insert also failed: {e}")
