from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests


@dataclass(frozen=True)
class HttpClient:
    timeout_s: float = 30.0

    def post_json(self, url: str, payload: dict[str, Any]) -> requests.Response:
        return requests.post(
            url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self.timeout_s,
        )
