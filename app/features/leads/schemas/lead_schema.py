from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.features.leads.models.lead_model import LeadCategory


class ExtractedInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    budget: Optional[str] = None
    timeframe: Optional[str] = None

    @field_validator("name", "email", "budget", "timeframe", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        # Model replies may carry budgets as numbers
        if value is None or isinstance(value, str):
            return value
        return str(value)


class CategorizationResult(BaseModel):
    """Category, urgency and reply suggested for one inbound message."""

    model_config = ConfigDict(populate_by_name=True)

    category: LeadCategory
    urgency: int = Field(..., ge=1, le=5)
    suggested_response: str = Field(..., alias="suggestedResponse")
    extracted_info: ExtractedInfo = Field(default_factory=ExtractedInfo, alias="extractedInfo")

    @field_validator("extracted_info", mode="before")
    @classmethod
    def _empty_when_missing(cls, value: Any) -> Any:
        return {} if value is None else value


class LeadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    phone: str
    to_number: Optional[str] = None
    message: str
    message_sid: Optional[str] = None
    category: LeadCategory
    urgency: int
    suggested_response: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class LeadListResponse(BaseModel):
    leads: List[LeadOut]


class LeadStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, description="New lifecycle status, e.g. contacted")
