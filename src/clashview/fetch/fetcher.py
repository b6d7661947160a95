#!/usr/bin/env python3
"""
CLASHVIEW FETCHER - Subscription Download
-----------------------------------------
Retrieves the raw subscription text over HTTP(S) with aiohttp.
This is the only component allowed to raise hard failures: bad URLs,
transport errors and non-2xx responses all surface as FetchError.

Author: ClashView Team
Date: 2026-10-17
"""

import asyncio
import logging
from typing import Optional

import aiohttp

logger = logging.getLogger("clashview.fetcher")

DEFAULT_USER_AGENT = "clashview/1.0"


class FetchError(Exception):
    """Base failure for anything that goes wrong before text is available."""


class InvalidURLError(FetchError):
    pass


class HTTPStatusError(FetchError):
    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason or ""
        super().__init__(f"HTTP error! Status: {status} - {self.reason}")


def validate_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise InvalidURLError("Please enter a valid URL.")
    if not (url.startswith("http://") or url.startswith("https://")):
        raise InvalidURLError("Invalid URL. Must start with http:// or https://")
    return url


class ConfigFetcher:
    """
    Downloads one subscription document per call. Holds no session between
    calls; each fetch opens and closes its own ClientSession.
    """

    def __init__(self, timeout: float = 10.0, user_agent: Optional[str] = None,
                 verify_ssl: bool = True):
        self.timeout = float(timeout)
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.verify_ssl = bool(verify_ssl)

    async def fetch_async(self, url: str) -> str:
        url = validate_url(url)
        headers = {"User-Agent": self.user_agent}
        connector = aiohttp.TCPConnector(ssl=self.verify_ssl)
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        logger.debug("fetch: GET %s (timeout=%.1fs, verify_ssl=%s)", url, self.timeout, self.verify_ssl)
        try:
            async with aiohttp.ClientSession(headers=headers, timeout=timeout,
                                             connector=connector, trust_env=False) as session:
                async with session.get(url) as resp:
                    if not (200 <= resp.status < 300):
                        raise HTTPStatusError(resp.status, resp.reason or "")
                    text = await resp.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request timed out after {self.timeout:.1f}s: {url}") from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Network request failed: {e}") from e

        logger.debug("fetch: %s returned %d characters", url, len(text))
        return text

    def fetch(self, url: str) -> str:
        """Blocking wrapper around fetch_async."""
        return asyncio.run(self.fetch_async(url))
