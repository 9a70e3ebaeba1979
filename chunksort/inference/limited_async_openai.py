from typing import Optional
from openai import AsyncOpenAI
import httpx

def get_client(
    api_key: str | None,
    base_url: str = "https://api.openai.com/v1",
    max_concurrent_requests: int = 5,
    timeout: float = 60.0,
    retries: int = 2,
    max_retries: int = 2,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncOpenAI:
    """
    AsyncOpenAI client on a connection-limited httpx pool.
    retries covers connection setup, max_retries covers failed API responses.
    """
    limits = httpx.Limits(
        max_connections = max_concurrent_requests,
        max_keepalive_connections = max_concurrent_requests,
    )
    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=retries, limits=limits)
    http_client = httpx.AsyncClient(
        timeout = httpx.Timeout(timeout),
        limits = limits,
        transport = transport,
    )
    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        max_retries=max_retries,
        http_client=http_client
    )
