from enum import Enum

from sqlalchemy import CheckConstraint, Column, Integer, String, Text
from sqlalchemy import Enum as SQLEnum

from app.platform.db.base import BaseModel


class LeadCategory(str, Enum):
    """Categories an inbound message can be assigned to"""

    RENTAL_INQUIRY = "rental_inquiry"
    MAINTENANCE = "maintenance"
    VIEWING_REQUEST = "viewing_request"
    VISITOR_ENTRY = "visitor_entry"
    PAYMENT = "payment"
    GENERAL = "general"


LEAD_STATUS_NEW = "new"


class Lead(BaseModel):
    __tablename__ = "leads"
    __table_args__ = (CheckConstraint("urgency BETWEEN 1 AND 5", name="ck_leads_urgency_range"),)

    # Inbound message
    phone = Column(String(40), nullable=False, index=True)
    to_number = Column(String(40), nullable=True)
    message = Column(Text, nullable=False, default="")
    message_sid = Column(String(64), nullable=True, index=True)  # not unique, redeliveries are kept

    # Categorization
    category = Column(
        SQLEnum(
            LeadCategory,
            name="lead_category",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=LeadCategory.GENERAL,
    )
    urgency = Column(Integer, nullable=False, default=2)
    suggested_response = Column(Text, nullable=True)

    status = Column(String(40), nullable=False, default=LEAD_STATUS_NEW, index=True)

    def __repr__(self) -> str:
        return f"<Lead(phone='{self.phone}', category='{self.category}', status='{self.status}')>"
