from __future__ import annotations

import logging
from typing import Protocol

from .models import Failure, Idle, ListResult, Pending, Query, Success
from .normalize import NETWORK_ERROR_MESSAGE


logger = logging.getLogger(__name__)


class Submitter(Protocol):
    async def submit(self, query: Query) -> ListResult: ...


class ListSession:
    """Owns the visible result; only the latest submission may update it."""

    def __init__(self, client: Submitter):
        self.client = client
        self.state: ListResult = Idle()
        self._token = 0
        self._email = ""

    @property
    def pending(self) -> bool:
        return isinstance(self.state, Pending)

    @property
    def email_sent(self) -> bool:
        return isinstance(self.state, Success) and bool(self._email)

    def is_current(self, token: int) -> bool:
        return token == self._token

    async def submit(self, text: str, email: str = "") -> ListResult | None:
        query = Query.build(text, email)
        if not query.is_submittable:
            return None

        self._token += 1
        token = self._token
        self.state = Pending()

        try:
            result = await self.client.submit(query)
        except Exception:
            logger.exception(f"Submission {token} failed unexpectedly")
            result = Failure(NETWORK_ERROR_MESSAGE)

        if not self.is_current(token):
            logger.debug(f"Dropping stale result for submission {token} (latest is {self._token})")
            return result

        self.state = result
        self._email = query.email
        return result
