from typing import AsyncIterator

import httpx


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Per-request outbound HTTP client (transport default timeouts)."""
    async with httpx.AsyncClient() as client:
        yield client
