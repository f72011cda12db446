from datetime import datetime
from types import SimpleNamespace

from app.features.leads.models.lead_model import LeadCategory
from app.features.leads.schemas.lead_schema import LeadOut


def test_lead_out_reads_orm_attributes():
    row = SimpleNamespace(
        id="0190-lead",
        phone="+15551234567",
        to_number="+15550001111",
        message="Is the 2 bedroom available?",
        message_sid="SM100",
        category=LeadCategory.RENTAL_INQUIRY,
        urgency=4,
        suggested_response="Thanks for your interest!",
        status="new",
        created_at=datetime(2024, 5, 1, 12, 0, 0),
        updated_at=None,
    )

    lead = LeadOut.model_validate(row)

    assert lead.id == "0190-lead"
    assert lead.category == LeadCategory.RENTAL_INQUIRY
    assert lead.updated_at is None
    assert lead.model_dump(mode="json")["category"] == "rental_inquiry"
