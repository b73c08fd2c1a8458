from __future__ import annotations

import asyncio
import logging

import requests

from .config import DEFAULT_TIMEOUT_S
from .http import HttpClient
from .models import Failure, ListResult, Query
from .normalize import NETWORK_ERROR_MESSAGE, reduce_response


logger = logging.getLogger(__name__)

GENERATE_LIST_PATH = "/api/generate-list"


def build_url(endpoint: str) -> str:
    base = endpoint.rstrip("/")
    if base.endswith(GENERATE_LIST_PATH):
        return base
    return base + GENERATE_LIST_PATH


class ListClient:
    def __init__(self, *, endpoint: str, timeout_s: float = DEFAULT_TIMEOUT_S):
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {timeout_s}")
        self.url = build_url(endpoint)
        self.timeout_s = timeout_s
        self.http = HttpClient(timeout_s=timeout_s)

    async def submit(self, query: Query) -> ListResult:
        """Send one generate-list request and normalize the outcome.

        Exactly one network attempt. Transport problems come back as a generic
        Failure; nothing about the URL or the exception reaches the message.
        The timeout also bounds the whole exchange, not just each socket read.
        """
        if not query.is_submittable:
            raise ValueError("Query text is empty")

        try:
            return await asyncio.wait_for(asyncio.to_thread(self.submit_sync, query), self.timeout_s)
        except asyncio.TimeoutError:
            logger.warning(f"generate-list gave no answer within {self.timeout_s:g}s")
            return Failure(NETWORK_ERROR_MESSAGE)

    def submit_sync(self, query: Query) -> ListResult:
        if not query.is_submittable:
            raise ValueError("Query text is empty")

        try:
            resp = self.http.post_json(self.url, query.to_payload())
        except requests.RequestException as e:
            logger.warning(f"generate-list request failed: {type(e).__name__}: {e}")
            return Failure(NETWORK_ERROR_MESSAGE)

        try:
            body = resp.json()
        except ValueError as e:
            logger.warning(f"generate-list returned non-JSON body (status {resp.status_code}): {e}")
            return Failure(NETWORK_ERROR_MESSAGE)

        result = reduce_response(resp.status_code, body)
        logger.info(f"generate-list status={resp.status_code} -> {result.kind}")
        return result
