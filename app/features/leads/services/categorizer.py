import json
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from openai import AsyncOpenAI
from pydantic import ValidationError

from app.features.leads.models.lead_model import LeadCategory
from app.features.leads.schemas.lead_schema import CategorizationResult, ExtractedInfo
from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger(__name__)

# System instruction for the categorization call
PROMPT_PATH = os.path.join(os.path.dirname(__file__), "../utils/PROMPT.md")

# From the first "{" to the last "}" so prose around the object is ignored
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

# (keywords, category, urgency, suggested response); first match wins
CATEGORY_RULES = (
    (
        ("rent", "available", "lease", "bedroom"),
        LeadCategory.RENTAL_INQUIRY,
        4,
        "Thanks for your interest! I'd love to help. When would be a good time to discuss?",
    ),
    (
        ("broken", "repair", "fix", "maintenance"),
        LeadCategory.MAINTENANCE,
        4,
        "I received your request. I'll arrange for someone to look at it ASAP. Is this urgent?",
    ),
    (
        ("view", "tour", "show", "see the"),
        LeadCategory.VIEWING_REQUEST,
        3,
        "I'd be happy to arrange a viewing! What times work best for you?",
    ),
    (
        ("visiting", "delivery", "here for", "guest"),
        LeadCategory.VISITOR_ENTRY,
        5,
        "I'll notify them right away. Please wait for confirmation.",
    ),
    (
        ("payment", "rent due", "deposit"),
        LeadCategory.PAYMENT,
        3,
        "Thanks for reaching out about payment. Let me check and get back to you.",
    ),
)

GENERAL_RESPONSE = "Thanks for your message! I'll get back to you shortly."


@lru_cache
def load_prompt_template() -> str:
    """Load the system prompt from PROMPT.md."""
    with open(PROMPT_PATH, "r") as f:
        return f.read()


@dataclass(frozen=True)
class JsonExtraction:
    """Outcome of pulling a JSON object out of free text: ok, or fall back."""

    ok: bool
    payload: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None


def extract_json_object(text: Optional[str]) -> JsonExtraction:
    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        return JsonExtraction(ok=False, reason="no JSON object in reply")

    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return JsonExtraction(ok=False, reason=f"invalid JSON: {e}")

    if not isinstance(payload, dict):
        return JsonExtraction(ok=False, reason="reply JSON is not an object")

    return JsonExtraction(ok=True, payload=payload)


def categorize_with_rules(message: str) -> CategorizationResult:
    """Deterministic keyword categorization used when the model is unavailable."""
    lower = (message or "").lower()

    for keywords, category, urgency, response in CATEGORY_RULES:
        if any(keyword in lower for keyword in keywords):
            return CategorizationResult(
                category=category,
                urgency=urgency,
                suggested_response=response,
                extracted_info=ExtractedInfo(),
            )

    return CategorizationResult(
        category=LeadCategory.GENERAL,
        urgency=2,
        suggested_response=GENERAL_RESPONSE,
        extracted_info=ExtractedInfo(),
    )


@lru_cache
def get_llm_client() -> Optional[AsyncOpenAI]:
    """OpenAI-compatible client, or None when no API key is configured."""
    if not settings.llm_api_key:
        return None
    return AsyncOpenAI(base_url=settings.LLM_BASE_URL, api_key=settings.llm_api_key)


class CategorizerService:
    """Classifies inbound messages with the LLM, falling back to keyword rules."""

    def __init__(self, llm_client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        self.llm_client = llm_client
        self.model = model or settings.LLM_MODEL

    async def categorize(self, message: str, phone: str) -> CategorizationResult:
        """
        Categorize a message. Never raises.

        Args:
            message: Raw SMS body
            phone: Sender number, included in the prompt for context

        Returns:
            CategorizationResult from the model if usable, otherwise from the rules
        """
        if self.llm_client is None:
            logger.info("No LLM client configured, using rule-based categorization")
            return categorize_with_rules(message)

        try:
            text = await self._complete(message, phone)
        except Exception as e:
            logger.error(f"AI categorization failed, using fallback: {e}")
            return categorize_with_rules(message)

        extraction = extract_json_object(text)
        if not extraction.ok:
            logger.warning(f"AI reply not usable ({extraction.reason}), using fallback")
            return categorize_with_rules(message)

        try:
            return CategorizationResult.model_validate(extraction.payload)
        except ValidationError as e:
            logger.warning(f"AI reply failed validation, using fallback: {e.error_count()} error(s)")
            return categorize_with_rules(message)

    async def _complete(self, message: str, phone: str) -> str:
        completion = await self.llm_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": load_prompt_template()},
                {"role": "user", "content": f'Categorize this message from {phone}: "{message}"'},
            ],
        )
        return completion.choices[0].message.content or ""


def get_categorizer() -> CategorizerService:
    return CategorizerService(llm_client=get_llm_client())
