from __future__ import annotations

import math
from typing import Any

from .models import Failure, ListResult, Product, Success


NETWORK_ERROR_MESSAGE = "Network error — please try again."
REQUEST_FAILED_MESSAGE = "Request failed. Please try again."


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _rating(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float)):
            rating = float(value)
        else:
            rating = float(str(value).strip().split("/")[0])
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return rating if math.isfinite(rating) else 0.0


def product_from_payload(row: dict[str, Any]) -> Product:
    """Build a Product from one backend row, defaulting anything missing."""
    # backend sends snake_case; tolerate camelCase too
    link = row.get("affiliate_link") or row.get("affiliateLink")
    image = row.get("image_url") or row.get("imageUrl")
    return Product(
        asin=_text(row.get("asin")),
        title=_text(row.get("title")),
        price=_text(row.get("price")),
        rating=_rating(row.get("rating")),
        description=_text(row.get("description")),
        affiliate_link=_text(link),
        image_url=_text(image) or None,
    )


def _failure_message(body: dict[str, Any]) -> str:
    err = body.get("error")
    if isinstance(err, str) and err.strip():
        return err.strip()
    return REQUEST_FAILED_MESSAGE


def reduce_response(status: int, body: Any) -> ListResult:
    """Fold an HTTP status and decoded JSON body into Success or Failure.

    Either a non-2xx status or a ``success`` flag that is not true is enough
    to call it a failure; the two are not assumed to agree. A success without
    a ``products`` list is also a failure.
    """
    if not isinstance(body, dict):
        return Failure(REQUEST_FAILED_MESSAGE)

    ok_status = 200 <= status < 300
    products = body.get("products")
    if not ok_status or body.get("success") is not True or not isinstance(products, list):
        return Failure(_failure_message(body))

    return Success(
        title=_text(body.get("title")),
        intro=_text(body.get("intro")),
        products=tuple(product_from_payload(row) for row in products if isinstance(row, dict)),
        generated_at=_text(body.get("generated_at")),
        affiliate_id=_text(body.get("affiliate_id")),
    )
