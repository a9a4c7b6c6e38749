"""
Client for the Extras proxy API.
Supplies the proxy base URL and sends requests through it the way the host does.
"""

import logging
from typing import Optional, Union

import httpx

from itgfetch.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class ExtrasClient:
    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def get_api_url(self) -> str:
        return self.api_url

    def default_headers(self) -> dict:
        headers = {"Bypass-Tunnel-Reminder": "bypass"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def fetch(
        self,
        url: Union[str, httpx.URL],
        method: str = "GET",
        headers: Optional[dict] = None,
        content: Optional[Union[str, bytes]] = None,
    ) -> httpx.Response:
        """
        Send a request through Extras.

        Caller headers are applied over the defaults (auth key, tunnel bypass).
        httpx errors propagate to the caller.
        """
        req_headers = self.default_headers()
        req_headers.update(headers or {})

        logger.debug("Extras %s %s", method.upper(), url)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.request(
                method=method.upper(),
                url=url,
                headers=req_headers,
                content=content,
            )
