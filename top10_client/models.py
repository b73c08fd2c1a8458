from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Query:
    text: str
    email: str = ""

    @staticmethod
    def build(text: str | None, email: str | None = None) -> "Query":
        return Query(text=(text or "").strip(), email=(email or "").strip())

    @property
    def is_submittable(self) -> bool:
        return bool(self.text.strip())

    def to_payload(self) -> dict[str, str]:
        return {"prompt": self.text.strip(), "email": self.email.strip()}


@dataclass(frozen=True)
class Product:
    """One ranked item of a generated list."""

    asin: str
    title: str
    price: str = ""           # display string, e.g. "$24.99"
    rating: float = 0.0       # out of 5
    description: str = ""
    affiliate_link: str = ""
    image_url: str | None = None


# ListResult variants. Exactly one is the visible state at any time.

@dataclass(frozen=True)
class Idle:
    kind: str = field(default="idle", init=False)


@dataclass(frozen=True)
class Pending:
    kind: str = field(default="pending", init=False)


@dataclass(frozen=True)
class Success:
    title: str = ""
    intro: str = ""
    products: tuple[Product, ...] = ()
    generated_at: str = ""
    affiliate_id: str = ""
    kind: str = field(default="success", init=False)


@dataclass(frozen=True)
class Failure:
    message: str
    kind: str = field(default="failure", init=False)


ListResult = Union[Idle, Pending, Success, Failure]
