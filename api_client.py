# api_client.py

import httpx
import asyncio
import json
import time
from typing import Any, Dict, Optional

from utils import log
from config import (
    WORKDAY_URL, WORKDAY_COOKIE, WORKDAY_CLIENT_VERSION, USER_AGENT, ACCEPT_HEADER,
    API_TIMEOUT, API_MAX_RETRIES, EXPONENTIAL_BACKOFF_FACTOR
)


class WorkdayClient:
    """An async client for Workday's private JSON API."""
    def __init__(self, url: str = WORKDAY_URL, cookie: str = WORKDAY_COOKIE,
                 max_retries: int = API_MAX_RETRIES, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.max_retries = max(1, max_retries)
        self._client = httpx.AsyncClient(
            http2=transport is None, timeout=API_TIMEOUT, transport=transport, headers=self._build_headers(cookie)
        )
        log.info(f"Initialized Workday client with {self.max_retries} attempt(s) per fetch.")

    @staticmethod
    def _build_headers(cookie: str) -> Dict[str, str]:
        return {
            "Cookie": cookie,
            "Accept": ACCEPT_HEADER,
            "User-Agent": USER_AGENT,
            "X-Workday-Client": WORKDAY_CLIENT_VERSION,
        }

    async def fetch_document(self) -> Optional[Dict[str, Any]]:
        """
        Fetches the rendered report as JSON.
        Network and HTTP status errors are retried with exponential backoff.
        Returns None when every attempt failed or the body is not JSON.
        """
        if not self.url:
            log.error("WORKDAY_URL is not configured; cannot fetch grades.")
            return None

        start_time = time.perf_counter()
        for attempt in range(self.max_retries):
            try:
                response = await self._client.get(self.url)
                response.raise_for_status()
                data = response.json()
                duration = time.perf_counter() - start_time
                log.info(f"Fetched grades document in {duration:.2f}s ({len(response.content)} bytes).")
                return data

            except (httpx.TransportError, httpx.HTTPStatusError) as e:
                log.warning(f"Network/HTTP error on attempt {attempt + 1}: {e}.")
                if attempt == self.max_retries - 1:
                    duration = time.perf_counter() - start_time
                    log.error(f"Fetching grades failed after all retries. Duration: {duration:.2f}s: {e}")
                    return None

            except json.JSONDecodeError as e:
                log.error(f"Workday response was not valid JSON: {e}")
                return None

            await asyncio.sleep(EXPONENTIAL_BACKOFF_FACTOR ** attempt)

        return None

    async def close(self):
        if not self._client.is_closed:
            await self._client.aclose()
            log.info("Closed Workday AsyncClient.")
