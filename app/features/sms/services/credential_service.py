import json
from typing import Optional

import httpx
from fastapi import Depends
from pydantic import ValidationError
from redis.asyncio import Redis

from app.features.sms.schemas.sms import ProviderCredentials
from app.platform.cache.redis import get_cache
from app.platform.config import settings
from app.platform.http import get_http_client
from app.platform.logger import get_logger

logger = get_logger(__name__)

# Single provider account, so a single fixed key
CREDENTIALS_CACHE_KEY = "twilio:credentials"
CREDENTIALS_PATH = "/api/credentials/twilio"


class CredentialService:
    """Read-through cache over the ChittyConnect credential endpoint."""

    def __init__(self, cache: Redis, http_client: httpx.AsyncClient):
        self.cache = cache
        self.http_client = http_client

    async def get_credentials(self) -> Optional[ProviderCredentials]:
        """
        Return provider credentials, or None when they cannot be obtained.

        A cached entry is returned as-is. On a miss the credential service is
        called once and a successful payload is cached for
        CREDENTIAL_CACHE_TTL_SECONDS. No retries.
        """
        cached = await self._read_cache()
        if cached is not None:
            return cached

        url = f"{settings.CHITTYCONNECT_URL.rstrip('/')}{CREDENTIALS_PATH}"
        headers = {
            "X-Service-Name": settings.SERVICE_NAME,
            "X-Canonical-URI": settings.CANONICAL_URI,
            "Content-Type": "application/json",
        }

        try:
            response = await self.http_client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"ChittyConnect error: {e}")
            return None

        if not response.is_success:
            logger.error(f"Failed to fetch Twilio credentials: {response.status_code}")
            return None

        try:
            payload = response.json()
            credentials = ProviderCredentials.model_validate(payload)
        except (ValueError, ValidationError) as e:
            logger.error(f"ChittyConnect returned an unusable credential payload: {e}")
            return None

        await self._write_cache(payload)
        return credentials

    async def _read_cache(self) -> Optional[ProviderCredentials]:
        try:
            raw = await self.cache.get(CREDENTIALS_CACHE_KEY)
        except Exception as e:
            logger.error(f"Credential cache read failed, treating as miss: {e}")
            return None

        if raw is None:
            return None

        try:
            return ProviderCredentials.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed cached credentials: {e}")
            return None

    async def _write_cache(self, payload: dict) -> None:
        try:
            await self.cache.set(
                CREDENTIALS_CACHE_KEY,
                json.dumps(payload),
                ex=settings.CREDENTIAL_CACHE_TTL_SECONDS,
            )
        except Exception as e:
            logger.error(f"Credential cache write failed: {e}")


def get_credential_service(
    cache: Redis = Depends(get_cache),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> CredentialService:
    return CredentialService(cache, http_client)
